"""Utility functions shared by the configuration models and loader."""
