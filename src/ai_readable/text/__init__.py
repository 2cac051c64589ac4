"""Text cleanup and inline link rendering.

Submodules:
  normalize  -- clean_text, extract_text_with_links
"""
