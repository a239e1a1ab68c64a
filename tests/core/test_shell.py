"""Tests for the bashlex structural view."""

from __future__ import annotations

import pytest

from rtk_hook.core.shell import COMPOUND, SIMPLE, UNPARSEABLE, parse_shape


class TestParseShape:
    @pytest.mark.parametrize(
        "cmd",
        [
            "git status",
            "ls -la /tmp",
            'grep "a|b" file.txt',
            "echo 'a;b'",
            "cat file.txt > out.txt",
        ],
    )
    def test_simple(self, cmd):
        assert parse_shape(cmd) == SIMPLE

    @pytest.mark.parametrize(
        "cmd",
        [
            "git status | grep x",
            "git add . && git commit",
            "make || echo failed",
            "cd src; ls",
            "echo $(ls | wc -l)",
            "diff <(ls a) <(ls b)",
        ],
    )
    def test_compound(self, cmd):
        assert parse_shape(cmd) == COMPOUND

    def test_heredoc_not_simple(self):
        assert parse_shape("cat <<EOF\nhello\nEOF\n") != SIMPLE

    def test_unterminated_quote(self):
        assert parse_shape("echo 'unterminated") == UNPARSEABLE

    def test_empty(self):
        assert parse_shape("") == UNPARSEABLE
