"""Crawl engine: frontier, URL filter, renderer contract and the crawl loop."""
