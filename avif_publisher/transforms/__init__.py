"""Text transforms applied to Markdown posts."""
