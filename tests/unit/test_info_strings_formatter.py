from __future__ import annotations

import pytest

from hsa_trace.info_strings.api_names import ApiNameBinding, HsaApiType, default_api_name, get_api_name_string
from hsa_trace.info_strings.config import FUTURE_ROCR_ENV, InfoStringsConfig
from hsa_trace.info_strings.enums import AgentInfo, CacheInfo, HsaStatus
from hsa_trace.info_strings.formatter import InfoStringFormatter
from hsa_trace.info_strings.model import KindFamily, QueryResult


def test_api_name_falls_back_to_c_function_name() -> None:
    binding = ApiNameBinding()
    assert not binding.installed
    assert binding.lookup(HsaApiType.HSA_AGENT_GET_INFO) is None
    assert get_api_name_string(HsaApiType.HSA_AGENT_GET_INFO, binding) == "hsa_agent_get_info"
    assert default_api_name(HsaApiType.HSA_EXT_PROGRAM_GET_INFO) == "hsa_ext_program_get_info"


def test_api_name_binding_is_write_once() -> None:
    binding = ApiNameBinding()
    binding.install(lambda api: "AgentGetInfo" if api is HsaApiType.HSA_AGENT_GET_INFO else None)
    assert binding.installed
    assert get_api_name_string(HsaApiType.HSA_AGENT_GET_INFO, binding) == "AgentGetInfo"
    assert get_api_name_string(HsaApiType.HSA_REGION_GET_INFO, binding) == "hsa_region_get_info"

    with pytest.raises(RuntimeError):
        binding.install(lambda _api: None)


def test_config_from_env() -> None:
    assert InfoStringsConfig.from_env({}).include_future is False
    assert InfoStringsConfig.from_env({FUTURE_ROCR_ENV: "1"}).include_future is True
    assert InfoStringsConfig.from_env({FUTURE_ROCR_ENV: " Yes "}).include_future is True
    assert InfoStringsConfig.from_env({FUTURE_ROCR_ENV: "0"}).include_future is False


def test_config_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(FUTURE_ROCR_ENV, "true")
    config = InfoStringsConfig.from_env()
    assert config.to_dict() == {"include_future": True}
    assert KindFamily.CACHE in config.schema()


def test_format_query() -> None:
    formatter = InfoStringFormatter()
    line = formatter.format_query(KindFamily.AGENT, QueryResult(b"gfx906", int(AgentInfo.NAME)))
    assert line == 'hsa_agent_get_info(HSA_AGENT_INFO_NAME) = "gfx906"'

    failed = QueryResult(b"", int(AgentInfo.NAME), int(HsaStatus.ERROR))
    assert formatter.format_query(KindFamily.AGENT, failed) == "hsa_agent_get_info(HSA_AGENT_INFO_NAME) = <query failed>"


def test_formatter_with_injected_names_and_future_schema() -> None:
    binding = ApiNameBinding()
    binding.install(lambda api: f"trace::{api.name}")
    formatter = InfoStringFormatter.from_config(InfoStringsConfig(include_future=True), names=binding)

    assert formatter.size_of(KindFamily.CACHE, CacheInfo.SIZE) == 4
    line = formatter.format_query(KindFamily.CACHE, QueryResult(b"\x03", int(CacheInfo.LEVEL)))
    assert line == "trace::HSA_CACHE_GET_INFO(HSA_CACHE_INFO_LEVEL) = 3"


def test_unknown_attribute_name_is_numeric() -> None:
    formatter = InfoStringFormatter()
    assert formatter.attribute_name(KindFamily.AGENT, 0x7FFF) == str(0x7FFF)


def test_failing_name_lookup_falls_back_to_c_name() -> None:
    def broken(_api: HsaApiType) -> str | None:
        raise KeyError("no such api")

    binding = ApiNameBinding()
    binding.install(broken)
    assert binding.lookup(HsaApiType.HSA_AGENT_GET_INFO) is None

    formatter = InfoStringFormatter(names=binding)
    line = formatter.format_query(KindFamily.AGENT, QueryResult(b"gfx906", int(AgentInfo.NAME)))
    assert line == 'hsa_agent_get_info(HSA_AGENT_INFO_NAME) = "gfx906"'
