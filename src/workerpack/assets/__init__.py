"""
Template page discovery and processing.
"""

from workerpack.assets.template_store import TemplateStore
from workerpack.assets.processor import AssetProcessor, encode_literal, decode_literal
