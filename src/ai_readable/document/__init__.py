"""Parsed-page adapter used by every extractor.

Submodules:
  model  -- Document: BeautifulSoup/lxml wrapper with query, order, link and layout helpers
"""
