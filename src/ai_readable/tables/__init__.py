"""Table detection, the four-strategy extraction waterfall, and ASCII rendering.

Submodules:
  patterns    -- compiled regex patterns, class hints and caps
  schema      -- TableData Pydantic model and TableCandidate record
  detection   -- is_table_related, the shared table classifier
  cells       -- cell content extraction with icon glyphs and links
  formatting  -- fixed-width bordered ASCII table rendering
  strategies  -- preformatted, structural, chart and custom-div strategies
  pipeline    -- extract_tables() waterfall entry point with dedup
"""
