"""Tests for the quill command-line interface."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from quill.client import ApiError, SessionContext
from quill.client.cli import build_parser, main


class TestParser:
    def test_list_defaults(self) -> None:
        args = build_parser().parse_args(["list"])

        assert (args.search, args.page, args.limit) == ("", 1, 10)

    def test_edit_content_sources_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["edit", "1", "--content", "x", "--content-file", "f"])

    def test_subcommand_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_whoami_logged_out(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        code = main(["--session-file", str(tmp_path / "s.json"), "whoami"])

        assert code == 0
        assert "Not logged in" in capsys.readouterr().out

    def test_whoami_logged_in(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "s.json"
        SessionContext(path=path).update("tok", "alice")

        assert main(["--session-file", str(path), "whoami"]) == 0
        assert "alice" in capsys.readouterr().out

    def test_logout_removes_session(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        SessionContext(path=path).update("tok", "alice")

        assert main(["--session-file", str(path), "logout"]) == 0
        assert not path.exists()

    def test_api_error_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        with patch(
            "quill.client.cli.QuillClient.get_post",
            new=AsyncMock(side_effect=ApiError(404, "Post with ID 3 not found")),
        ):
            code = main(["--session-file", str(tmp_path / "s.json"), "show", "3"])

        assert code == 1
        assert "Post with ID 3 not found" in capsys.readouterr().err

    def test_list_renders_table(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        page = {
            "posts": [
                {
                    "id": 1,
                    "title": "Hello World",
                    "content": "body",
                    "imageURL": None,
                    "author": "alice",
                    "createdAt": "2025-01-01T10:00:00Z",
                },
            ],
            "total": 1,
            "page": 1,
            "pages": 1,
        }
        with patch("quill.client.cli.QuillClient.list_posts", new=AsyncMock(return_value=page)):
            code = main(["--session-file", str(tmp_path / "s.json"), "list"])

        assert code == 0
        out = capsys.readouterr().out
        assert "Hello World" in out
        assert "alice" in out
