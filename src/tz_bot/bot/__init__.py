"""Discord-facing pieces of TZ Bot: extension loading and event listeners."""
