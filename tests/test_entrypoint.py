"""
Tests for the uvicorn entry script and the project layout around it.
"""

import runpy
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).parent.parent
MAIN = PROJECT_ROOT / "cmd" / "api" / "main.py"


class TestEntrypoint:
    def test_stdlib_cmd_not_shadowed(self):
        import cmd
        import pdb

        assert hasattr(cmd, "Cmd")
        assert issubclass(pdb.Pdb, cmd.Cmd)
        assert not (PROJECT_ROOT / "cmd" / "__init__.py").exists()

    def test_runs_uvicorn_on_app_factory(self):
        with patch("uvicorn.run") as run:
            runpy.run_path(str(MAIN), run_name="__main__")

        run.assert_called_once()
        args, kwargs = run.call_args
        assert args == ("internal.api.app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["port"] == 3001

    def test_import_does_not_start_server(self):
        with patch("uvicorn.run") as run:
            runpy.run_path(str(MAIN), run_name="entry")

        run.assert_not_called()
