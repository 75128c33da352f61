import json

import pytest

from openapi_to_ts.config import CodegenConfig, OutputConfig, OutputMode, load_config
from openapi_to_ts.errors import ConfigError, ErrorKind


class TestCodegenConfig:
    def test_defaults(self):
        config = CodegenConfig()
        assert config.output == ".output"
        assert config.timeout == 10.0
        assert config.data == []
        assert config.clients == []
        assert config.type_with_prefix is False
        assert config.output_config == OutputConfig()
        assert config.output_config.mode == OutputMode.FORCE

    def test_from_dict_accepts_camel_case_keys(self):
        config = CodegenConfig.from_dict(
            {
                "output": "src/api",
                "actionCreatorImport": "import { createRequestAction } from './request';",
                "typeWithPrefix": True,
                "timeout": 5,
                "data": ["./petstore.json"],
                "clients": ["https://example.com/swagger.json"],
                "outputConfig": {"mode": "error", "atomic_write": False},
                "unknownKey": "ignored",
            }
        )
        assert config.output == "src/api"
        assert config.action_creator_import.startswith("import")
        assert config.type_with_prefix is True
        assert config.timeout == 5.0
        assert config.data == ["./petstore.json"]
        assert config.clients == ["https://example.com/swagger.json"]
        assert config.output_config.mode == OutputMode.ERROR_IF_EXISTS
        assert config.output_config.atomic_write is False
        assert config.output_config.validate_before_write is True
        assert not hasattr(config, "unknownKey")

    def test_round_trip(self):
        config = CodegenConfig(output="out", type_with_prefix=True, data=["a.json"])
        assert CodegenConfig.from_dict(config.to_dict()) == config

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            CodegenConfig.from_dict({"outputConfig": {"mode": "sometimes"}})


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "ts-codegen.config.json") == CodegenConfig()

    def test_load(self, tmp_path):
        path = tmp_path / "ts-codegen.config.json"
        path.write_text(json.dumps({"output": "generated", "data": ["petstore.json"]}))
        config = load_config(path)
        assert config.output == "generated"
        assert config.data == ["petstore.json"]

    @pytest.mark.parametrize("content", ["{broken", "[]", '{"outputConfig": {"mode": "sometimes"}}'])
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / "ts-codegen.config.json"
        path.write_text(content)
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.kind == ErrorKind.INVALID_CONFIG
        assert exc_info.value.source == str(path)
