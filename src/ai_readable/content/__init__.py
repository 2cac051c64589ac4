"""Page content extraction and final text assembly.

Submodules:
  context     -- ExtractionContext, MarkerRegistry and typed output segments
  navigation  -- brand name, navigation links, CTAs and footer links
  headings    -- document-order heading walk with deferred table markers
  markers     -- resolution of table markers against the candidate pool
  assemble    -- translate_website() entry point and CLI
"""
