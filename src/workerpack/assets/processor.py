# src/workerpack/assets/processor.py
import base64
import json
import logging
from typing import Iterable, List

from workerpack.schemas.build import SubstitutionResult, TemplatePage

logger = logging.getLogger(__name__)

VERSION_TOKEN = "__VERSION__"
STYLE_TOKEN = "__STYLE__"
SCRIPT_TOKEN = "__SCRIPT__"


def encode_literal(text: str) -> str:
    """
    Base64-encode UTF-8 text and quote it as a JSON string literal.
    """
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return json.dumps(encoded)


def decode_literal(literal: str) -> bytes:
    """
    Inverse of encode_literal: returns the original UTF-8 bytes.
    """
    return base64.b64decode(json.loads(literal))


class AssetProcessor:
    """
    Token substitution and inlining for template pages.
    """

    def __init__(self, version: str):
        self.version = version

    def substitute(self, page: TemplatePage) -> str:
        """
        Return the page HTML with every placeholder token replaced.
        """
        html = page.raw_html.replace(VERSION_TOKEN, self.version)

        if not page.is_error_page:
            html = html.replace(STYLE_TOKEN, f"<style>{page.style_text or ''}</style>")
            html = html.replace(SCRIPT_TOKEN, page.script_text or "")
        return html

    def process(self, page: TemplatePage) -> SubstitutionResult:
        html = self.substitute(page)
        return SubstitutionResult(name=page.name, encoded_html=encode_literal(html))

    def process_all(self, pages: Iterable[TemplatePage]) -> List[SubstitutionResult]:
        results = []
        for page in pages:
            logger.debug("Processing page '%s'", page.name)
            results.append(self.process(page))
        logger.info("Processed %d template page(s)", len(results))
        return results
