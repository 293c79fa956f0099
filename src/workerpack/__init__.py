"""
workerpack: assembles a single-file edge worker script from HTML template
pages and a JavaScript entry module, then packages it as a raw file and a
zip archive.
"""

__version__ = "0.1.0"
