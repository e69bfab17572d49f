"""JIRA models, the session interface, pull-request reference rules and workflow."""