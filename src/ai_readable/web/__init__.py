"""HTTP surface for page translation and the AI-mode toggle."""
