import pytest

from shortcut_hub.validator import (
    INVALID_TARGET,
    MISSING_TARGET,
    ValidationError,
    check_target,
    extension_of,
    validate,
)


class TestValidate:
    @pytest.mark.parametrize("target", [
        "https://example.com",
        "http://localhost:8080/path",
        "file:///home/me/report.html",
    ])
    def test_url_schemes_accepted(self, target):
        assert validate(target) is True

    @pytest.mark.parametrize("target", [
        "setup.exe",
        "scripts/deploy.sh",
        "tools\\build.BAT",
        "run.cmd",
        "profile.PS1",
        "sub/dir/job.py",
        "server.js",
        "server.mjs",
        "main.ts",
    ])
    def test_allow_listed_extensions_accepted(self, target):
        assert validate(target) is True

    @pytest.mark.parametrize("target", ["notepad", "ls", "code", ".."])
    def test_bare_commands_accepted(self, target):
        assert validate(target) is True

    @pytest.mark.parametrize("target", [
        "/usr/bin/env",
        "/opt/app/bin/launch",
        "C:\\Program Files\\App\\app",
    ])
    def test_absolute_paths_accepted(self, target):
        assert validate(target) is True

    @pytest.mark.parametrize("target", [
        "sub/dir/thing",
        "../../etc",
        "notes.txt",
        "docs\\readme.md",
    ])
    def test_relative_or_unknown_shapes_rejected(self, target):
        assert validate(target) is False


class TestCheckTarget:
    @pytest.mark.parametrize("target", ["", "   ", None])
    def test_missing_target(self, target):
        with pytest.raises(ValidationError) as exc:
            check_target(target)
        assert exc.value.reason == MISSING_TARGET
        assert exc.value.message == "Executable path is required"

    def test_invalid_target(self):
        with pytest.raises(ValidationError) as exc:
            check_target("sub/dir/thing")
        assert exc.value.reason == INVALID_TARGET
        assert exc.value.message == "Invalid executable path"

    def test_valid_target_returned_unchanged(self):
        assert check_target("build.sh") == "build.sh"


def test_extension_of_handles_both_separators():
    assert extension_of("C:\\tools\\Run.CMD") == ".cmd"
    assert extension_of("a.dir/tool") == ""
    assert extension_of(".bashrc") == ""
