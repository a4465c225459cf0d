"""Reconstruct structured play-by-play drives from scraped scoring summaries."""
