"""Code-review bot utilities: versions, JIRA workflow, Slack recipients, passwords, tokens and metrics."""

__version__ = "0.1.0"