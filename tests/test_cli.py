import json
import shutil
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from pispi_sdk.build.patcher import PatchReport
from pispi_sdk.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliNormalize:
    def test_normalize_fixes_spec(self, tmp_path):
        spec = tmp_path / "openapi.json"
        shutil.copy(FIXTURES / "openapi.json", spec)

        runner = CliRunner()
        result = runner.invoke(main, ["normalize", str(spec)])

        assert result.exit_code == 0
        assert "Removed 2 null operations" in result.output
        assert "Fixed 3 path operations" in result.output
        doc = json.loads(spec.read_text(encoding="utf-8"))
        assert doc["tags"] == []

    def test_normalize_structural_error_exits_1(self, tmp_path):
        spec = tmp_path / "openapi.json"
        spec.write_text('{"openapi": "3.0.1", "info": {}, "paths": {}}', encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, ["normalize", str(spec)])

        assert result.exit_code == 1
        assert '❌ Error validating OpenAPI spec: Missing or invalid "components" field' in result.output

    def test_normalize_missing_file_exits_1(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["normalize", str(tmp_path / "openapi.json")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_normalize_uses_configured_spec_path(self, tmp_path):
        shutil.copy(FIXTURES / "openapi.json", tmp_path / "spec.json")
        config = tmp_path / "pispi.yaml"
        config.write_text(f"spec_path: {tmp_path / 'spec.json'}\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config), "normalize"])

        assert result.exit_code == 0
        doc = json.loads((tmp_path / "spec.json").read_text(encoding="utf-8"))
        assert doc["paths"]["/webhooks"]["get"]["operationId"] == "getWebhooks"

    def test_invalid_config_file(self, tmp_path):
        config = tmp_path / "pispi.yaml"
        config.write_text("unknown_option: 1\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config), "normalize"])

        assert result.exit_code != 0
        assert "Invalid build configuration" in result.output


class TestCliPatch:
    def test_patch_generated_tree(self, tmp_path):
        generated = tmp_path / "generated"
        shutil.copytree(FIXTURES / "generated", generated)

        runner = CliRunner()
        result = runner.invoke(main, [
            "patch",
            "--generated-dir", str(generated),
            "--base-url", "https://api.pi-bceao.com/piz/v1",
            "--api-version", "1.2.0",
        ])

        assert result.exit_code == 0
        assert "Fixed 3 empty type definition(s)" in result.output
        assert "Done! 3 fix(es) in 3 file(s)" in result.output
        content = (generated / "core" / "OpenAPI.ts").read_text(encoding="utf-8")
        assert "BASE: 'https://api.pi-bceao.com/piz/v1'" in content
        assert "VERSION: '1.2.0'" in content

    def test_patch_missing_tree_exits_0(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["patch", "--generated-dir", str(tmp_path / "missing")])

        assert result.exit_code == 0
        assert "Could not update OpenAPI.ts" in result.output
        assert "Could not fix empty types" in result.output

    @patch("pispi_sdk.cli.patch_generated")
    def test_patch_defaults_from_config(self, mock_patch, tmp_path):
        mock_patch.return_value = PatchReport()

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(FIXTURES / "pispi.yaml"), "patch"])

        assert result.exit_code == 0
        config = mock_patch.call_args[0][0]
        assert config.generated_dir == Path("generated")
        assert config.base_url == "https://api.pi-bceao.com/piz/v1"
        assert config.api_version == "2.1.0"

    def test_patch_latin1_files_exits_0(self, tmp_path):
        generated = tmp_path / "generated"
        shutil.copytree(FIXTURES / "generated", generated)
        model = generated / "models" / "Commentaire.ts"
        model.write_bytes("// op\xe9ration\nexport type remise = ;\n".encode("latin-1"))
        openapi = generated / "core" / "OpenAPI.ts"
        openapi.write_bytes(openapi.read_bytes() + "// d\xe9faut\n".encode("latin-1"))
        model_before = model.read_bytes()
        openapi_before = openapi.read_bytes()

        runner = CliRunner()
        result = runner.invoke(main, ["patch", "--generated-dir", str(generated)])

        assert result.exit_code == 0
        assert "Fixed 3 empty type definition(s)" in result.output
        assert model.read_bytes() == model_before
        assert openapi.read_bytes() == openapi_before
        webhook = (generated / "models" / "WebhookModificationRequest.ts").read_text(encoding="utf-8")
        assert "callbackUrl?: string;" in webhook


class TestCliNormalizeUnreadable:
    def test_latin1_spec_exits_1_with_diagnostic(self, tmp_path):
        spec = tmp_path / "openapi.json"
        original = '{"openapi": "3.0.1", "info": {"title": "\xe9"}, "paths": {}, "components": {}}'.encode("latin-1")
        spec.write_bytes(original)

        runner = CliRunner()
        result = runner.invoke(main, ["normalize", str(spec)])

        assert result.exit_code == 1
        assert "❌ Error validating OpenAPI spec: Invalid UTF-8" in result.output
        assert spec.read_bytes() == original

    def test_directory_spec_exits_1_with_diagnostic(self, tmp_path):
        spec_dir = tmp_path / "openapi.json"
        spec_dir.mkdir()

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(_config_for(tmp_path, spec_dir)), "normalize"])

        assert result.exit_code == 1
        assert "❌ Error validating OpenAPI spec:" in result.output


def _config_for(tmp_path: Path, spec_path: Path) -> Path:
    config = tmp_path / "pispi.yaml"
    config.write_text(f"spec_path: {spec_path}\n", encoding="utf-8")
    return config
