"""
Tests for token substitution and literal encoding.
"""

import base64
import json

from workerpack.assets.processor import (
    AssetProcessor,
    SCRIPT_TOKEN,
    STYLE_TOKEN,
    VERSION_TOKEN,
    decode_literal,
    encode_literal,
)
from workerpack.schemas.build import TemplatePage


def make_page(name="panel", html="<p>__VERSION__</p>__STYLE____SCRIPT__"):
    return TemplatePage(name=name, raw_html=html, style_text="p{margin:0}", script_text="let x = 1;")


def test_version_replaced_at_every_position():
    page = make_page(html="<title>__VERSION__</title><footer>__VERSION__</footer>__STYLE____SCRIPT__")
    html = AssetProcessor("1.2.3").substitute(page)
    assert html.count("1.2.3") == 2
    assert VERSION_TOKEN not in html
    assert html.startswith("<title>1.2.3</title><footer>1.2.3</footer>")


def test_style_and_script_inlined():
    html = AssetProcessor("1.0.0").substitute(make_page())
    assert STYLE_TOKEN not in html
    assert SCRIPT_TOKEN not in html
    assert "<style>p{margin:0}</style>" in html
    assert html.endswith("let x = 1;")


def test_script_is_not_transformed():
    script = "function  f ( a ) {\n    // keep me\n    return a;\n}\n"
    page = TemplatePage(name="login", raw_html="__SCRIPT__", style_text="", script_text=script)
    assert AssetProcessor("1").substitute(page) == script


def test_error_page_only_gets_version():
    page = TemplatePage(name="error", raw_html="v__VERSION__ __STYLE__ __SCRIPT__")
    html = AssetProcessor("9.9").substitute(page)
    assert html == "v9.9 __STYLE__ __SCRIPT__"


def test_encoded_literal_round_trip():
    page = make_page(html="<p>héllo __VERSION__ ✓</p>__STYLE____SCRIPT__")
    processor = AssetProcessor("2.0")
    result = processor.process(page)

    assert result.name == "panel"
    assert result.encoded_html.startswith('"') and result.encoded_html.endswith('"')
    assert decode_literal(result.encoded_html) == processor.substitute(page).encode("utf-8")


def test_encode_literal_is_json_string_of_base64():
    literal = encode_literal("abc")
    assert json.loads(literal) == base64.b64encode(b"abc").decode("ascii")


def test_processing_is_deterministic():
    processor = AssetProcessor("1.2.3")
    assert processor.process(make_page()) == processor.process(make_page())


def test_process_all_keeps_order():
    pages = [make_page("secrets"), make_page("error", "x"), make_page("login")]
    results = AssetProcessor("1").process_all(pages)
    assert [r.name for r in results] == ["secrets", "error", "login"]


def test_tokens_inside_inlined_assets_left_as_written():
    page = TemplatePage(
        name="panel",
        raw_html="__VERSION__ __SCRIPT__",
        style_text="",
        script_text="const v='__VERSION__';",
    )
    assert AssetProcessor("1.2.3").substitute(page) == "1.2.3 const v='__VERSION__';"
