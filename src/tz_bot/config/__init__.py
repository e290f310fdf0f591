"""Configuration loading and validation for TZ Bot."""
