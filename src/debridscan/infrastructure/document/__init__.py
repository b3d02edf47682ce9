from .html_document import HtmlDocument, parse_html

__all__ = ["HtmlDocument", "parse_html"]
