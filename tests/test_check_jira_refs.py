import pytest

from octobot.jira.check_jira_refs import (
    ALLOWED_SKIP_TYPES,
    conventional_commit_jira_skip_type,
    latest_commit_hash,
    missing_reference_message,
    skipped_check_message,
)


@pytest.mark.parametrize("commit_type", ALLOWED_SKIP_TYPES)
def test_skip_types(commit_type):
    assert conventional_commit_jira_skip_type(f"{commit_type}: tidy things") == commit_type


@pytest.mark.parametrize(
    "title, expected",
    [
        ("docs(readme)!: rewrite", "docs"),
        ("chore(deps): bump things", "chore"),
        ("feat: add a thing", None),
        ("fix(api): repair it", None),
        ("Docs: case matters", None),
        ("not a conventional commit", None),
        ("[SER-1] docs: prefixed", None),
    ],
)
def test_skip_type_titles(title, expected):
    assert conventional_commit_jira_skip_type(title) == expected


def test_missing_reference_single_project():
    assert (
        missing_reference_message(["SER"])
        == "Expected a JIRA reference in a commit message for the project SER"
    )


def test_missing_reference_many_projects():
    msg = missing_reference_message(["SER", "CLI"])
    assert msg.startswith("Expected a JIRA reference in a commit message for at least one")
    assert msg.endswith(": SER, CLI")


def test_skipped_check_message():
    assert skipped_check_message("chore") == "Skipped JIRA check for commit type: chore"


def test_latest_commit_hash_without_commits():
    assert latest_commit_hash("aabbccddee", []) == "aabbccddee"


def test_latest_commit_hash_uses_last_commit():
    assert latest_commit_hash("aabbccddee", ["1111", "ffbbccddee"]) == "ffbbccddee"