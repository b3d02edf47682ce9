from .extractor import LinkExtractor, extract_host, extract_urls_from_text

__all__ = ["LinkExtractor", "extract_host", "extract_urls_from_text"]
