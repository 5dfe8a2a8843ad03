from __future__ import annotations

from hsa_trace.info_strings.arrays import get_array_string
from hsa_trace.info_strings.delimiters import surround_with, surround_with_deref, surround_with_list, surround_with_struct
from hsa_trace.info_strings.enums import AgentFeature, AgentInfo, Profile, c_name
from hsa_trace.info_strings.scalars import (
    get_bool_ptr_string,
    get_bool_string,
    get_enum_string,
    get_flags_string,
    get_hex_string,
    get_pointer_string,
    get_string_ptr_string,
    get_string_string,
    get_uint8_string,
)


def test_delimiters() -> None:
    assert surround_with(5, "<", ">") == "<5>"
    assert surround_with_deref("x") == "[x]"
    assert surround_with_struct("a=1") == "{a=1}"
    assert surround_with_list("1,2") == "{1,2}"


def test_bool_and_uint8_strings() -> None:
    assert get_bool_string(True) == "true"
    assert get_bool_string(False) == "false"
    # 65 is 'A' as a char; uint8 values always render as digits.
    assert get_uint8_string(65) == "65"
    assert get_uint8_string(0) == "0"


def test_bool_ptr_string() -> None:
    assert get_bool_ptr_string(None, True) == "NULL"
    assert get_bool_ptr_string(0, True) == "NULL"
    assert get_bool_ptr_string(0x1000, True) == "[true]"
    assert get_bool_ptr_string(0x1000, False) == "[false]"


def test_string_truncated_at_60_chars() -> None:
    text = "a" * 70
    assert get_string_string(text) == '["' + "a" * 60 + '..."]'
    assert get_string_string(text, truncate=False) == '["' + text + '"]'
    assert get_string_string("a" * 60) == '["' + "a" * 60 + '"]'


def test_string_without_deref_brackets() -> None:
    assert get_string_string("gfx906", surround_with_deref=False) == '"gfx906"'


def test_string_from_c_buffer_stops_at_nul() -> None:
    assert get_string_string(b"gfx906\x00garbage") == '["gfx906"]'
    assert get_string_string(None) == "NULL"


def test_string_ptr_fallback() -> None:
    assert get_string_ptr_string(None, "unknown") == '["unknown"]'
    assert get_string_ptr_string("real", "unknown") == '["real"]'
    assert get_string_ptr_string(None, None) == "NULL"
    assert get_string_ptr_string(None, "f" * 70) == '["' + "f" * 60 + '..."]'
    assert get_string_ptr_string(None, "f" * 70, truncate=False) == '["' + "f" * 70 + '"]'


def test_pointer_and_hex() -> None:
    assert get_pointer_string(0) == "NULL"
    assert get_pointer_string(None) == "NULL"
    assert get_pointer_string(0x1000) == "0x0000000000001000"
    assert get_hex_string(0x66AF) == "0x66af"


def test_enum_and_flags() -> None:
    assert c_name(AgentInfo.NAME) == "HSA_AGENT_INFO_NAME"
    assert get_enum_string(1, Profile) == "HSA_PROFILE_FULL"
    assert get_enum_string(7, Profile) == "7"
    assert get_enum_string(3, None) == "3"

    both = "HSA_AGENT_FEATURE_KERNEL_DISPATCH|HSA_AGENT_FEATURE_AGENT_DISPATCH"
    assert get_flags_string(3, AgentFeature) == both
    assert get_flags_string(5, AgentFeature) == "HSA_AGENT_FEATURE_KERNEL_DISPATCH|0x4"
    assert get_flags_string(0, AgentFeature) == "0"


def test_array_bounded_to_three_items() -> None:
    assert get_array_string([1, 2, 3, 4, 5], 5, str) == "{1,2,3,...}"
    assert get_array_string([1, 2, 3], 3, str) == "{1,2,3}"
    assert get_array_string([7], 1, str) == "{7}"
    assert get_array_string([], 0, str) == "{}"


def test_array_missing_inputs() -> None:
    assert get_array_string(None, 3, str) == ""
    assert get_array_string([1, 2], 2, None) == ""
