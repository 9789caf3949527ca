"""Core Business Components.

This package contains independent business modules:
- workspace: Workspace, folder, form and element management plus sharing
- responses: Respondent sessions, answers, submission and analytics
"""
