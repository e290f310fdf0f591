"""Shared utilities for TZ Bot."""
