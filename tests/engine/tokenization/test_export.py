# tests/engine/tokenization/test_export.py
import pytest

from tokenscope.engine.tokenization import format_export, parse_token_ids
from tokenscope.schemas.tokenizer_schemas import (
    DisplayMode, ExportFormat, ResultSet, Token, TokenizeMode
)

@pytest.fixture
def encoded() -> ResultSet:
    return ResultSet(
        mode=TokenizeMode.ENCODE,
        model="gpt-4",
        tokens=[Token(text="Hi", id=5), Token(text=" there", id=9)],
    )


@pytest.mark.parametrize("display_mode", [DisplayMode.BADGES, DisplayMode.NUMBERED])
def test_encode_export_is_one_id_per_line(encoded, display_mode):
    assert format_export(encoded, display_mode) == "5\n9"

def test_id_export_round_trips_through_decode_parser(encoded):
    assert parse_token_ids(format_export(encoded)) == [5, 9]

def test_annotated_badges_export(encoded):
    content = format_export(encoded, DisplayMode.BADGES, ExportFormat.ANNOTATED)
    assert content == "Hi -> 5\n there -> 9"

def test_annotated_numbered_export(encoded):
    content = format_export(encoded, DisplayMode.NUMBERED, ExportFormat.ANNOTATED)
    assert content == "1. Hi -> 5\n2.  there -> 9"

def test_decode_export_is_verbatim():
    result = ResultSet(mode=TokenizeMode.DECODE, model="gpt-4", text="  Hello,\nworld ")
    assert format_export(result, DisplayMode.NUMBERED, ExportFormat.ANNOTATED) == "  Hello,\nworld "

@pytest.mark.parametrize("mode", [TokenizeMode.ENCODE, TokenizeMode.DECODE])
@pytest.mark.parametrize("export_format", [ExportFormat.IDS, ExportFormat.ANNOTATED])
def test_empty_result_exports_nothing(mode, export_format):
    assert format_export(ResultSet.empty(mode, "gpt-4"), DisplayMode.BADGES, export_format) is None
