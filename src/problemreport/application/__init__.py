"""Application layer: report rendering."""
