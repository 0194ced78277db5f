"""Small Batch COGS Calculator."""
