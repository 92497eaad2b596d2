"""playwright-sniff results commands."""
