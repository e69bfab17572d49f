# octobot

Building blocks for a bot that ties code review to JIRA and Slack.

## What is in the package

- `octobot.version.Version`: dotted version numbers (`1.2`, `3.4.0.1000`).
  `Version.parse` returns `None` for text that is not a version. Parsed versions
  always have at least three parts. They compare, sort and hash numerically, and
  missing trailing parts count as zero. `major()` and `minor()` return the first
  two parts.
- `octobot.jira.workflow` reads JIRA keys out of commit messages:
  `get_fixed_jira_keys` finds keys after "Fix", "Fixes" or "Fixed";
  `get_mentioned_jira_keys` finds keys after "See"; `get_referenced_jira_keys`,
  `get_all_jira_keys` and `references_jira` cover the rest. It also provides these
  coroutines:
  - `submit_for_review` comments on issues and moves them to the progress or
    review states.
  - `resolve_issue` comments on issues and resolves the fixed ones, setting a
    fixed resolution when the transition asks for one.
  - `add_pending_version` records a pending version on issues.
  - `merge_pending_versions` folds pending versions into a real version. It has
    a `DryRunMode`.
  - `sort_versions` reorders a project's versions: numeric ones ascending, the
    rest after them by name.

  State names come from a `WorkflowStates` value. Commits for `resolve_issue` are
  `PushedCommit` values, and pull requests are `ReviewRequest` values.
- `octobot.jira.models`: issue, status, transition, resolution, field and JIRA
  version records, with `from_dict`/`to_dict` for the JSON shapes that JIRA uses.
- `octobot.jira.api`: the abstract asynchronous `Session` interface that the
  workflow talks to. It also holds `JiraVersionPosition` and helpers that build
  and read request bodies: `lookup_field`, `parse_pending_version_field`,
  `parse_pending_versions`, `add_pending_version_value`,
  `remove_pending_versions_value`, `fix_version_update` and
  `pending_versions_update`.
- `octobot.jira.check_jira_refs`: the rules for the "jira" check on pull requests.
  `conventional_commit_jira_skip_type` lets conventional-commit titles of type
  build, chore, docs, refactor, style or test skip the check. The module also has
  `missing_reference_message`, `skipped_check_message` and `latest_commit_hash`.
- `octobot.slack.SlackRecipient`: a channel or user by id and name, with
  `by_name` and `user_mention` (`@name`).
- `octobot.passwd`: `store_password` and `verify_password`. Hashes are
  PBKDF2-HMAC-SHA256 with 100,000 iterations, stored as hex.
- `octobot.jwt_token.new_token`: an RS256 token for an app id, made from a DER
  RSA private key. The token is valid for nine minutes.
- `octobot.metrics`: a thread-safe `Gauge`. `scoped_inc` is a context manager that
  raises a gauge for the length of a `with` block. `cleanup_path` turns request
  paths into labels with few distinct values.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

```python
from octobot.version import Version

assert Version.parse("1.2") == Version.parse("1.2.0")
assert str(Version.parse("1")) == "1.0.0"
assert Version.parse("4.8") > Version.parse("4.1.2")
```

```python
from octobot.jira.workflow import get_jira_keys, get_jira_project

get_jira_keys(["Fix [SER-1] and [CLI-2]"], ["SER"])   # ["SER-1"]
get_jira_project("SERVER-123")                        # "SERVER"
```

```python
from octobot.passwd import store_password, verify_password

stored = store_password("password", "salt")
assert verify_password("password", "salt", stored)
```

```python
from octobot.metrics import Gauge, scoped_inc

jobs = Gauge("current_jobs")
with scoped_inc(jobs):
    assert jobs.value == 1
assert jobs.value == 0
```

## What it does not do

The package ships no JIRA HTTP client. The workflow coroutines accept any object
that implements `octobot.jira.api.Session`, and you supply that object.

The package has no GitHub or Slack client. The JIRA check rules return messages
and hashes, but they do not post check runs.

The package has no storage for repository or user settings, no metrics registry
or exporter, no web server and no command-line program.