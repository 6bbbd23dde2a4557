"""News aggregator: bilingual RSS ingestion into a deduplicated article store."""

__version__ = "0.1.0"
