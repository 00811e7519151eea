"""
Tests for plan-editor.

- helpers.py: document builders and store fixtures shared by the test modules
"""
