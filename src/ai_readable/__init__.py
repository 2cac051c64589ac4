"""Turn a rendered web page into a single AI-readable text view.

Subpackages:
  document  -- BeautifulSoup adapter over the page's element tree
  text      -- whitespace/character cleanup and inline link rendering
  tables    -- table detection, the four-strategy waterfall, ASCII rendering
  content   -- navigation, heading walk, marker resolution, final assembly
  web       -- FastAPI surface over translation and the AI-mode toggle
"""
