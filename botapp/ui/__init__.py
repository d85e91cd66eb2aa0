"""Text rendering helpers for chat replies and notifications."""
