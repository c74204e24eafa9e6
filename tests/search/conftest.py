"""Shared fixtures for search pipeline tests.

`tree` builds a small directory layout:

    root/
        a.txt          "alpha beta gamma beta"
        b.txt          "alpha only"
        bin.dat        bytes that are not valid UTF-8, containing "alpha beta"
        sub/
            c.txt      "beta\nalpha\n"
            deeper/
                d.md   "gamma"
"""
from __future__ import annotations

import pytest


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "root"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_text("alpha beta gamma beta", encoding="utf-8")
    (root / "b.txt").write_text("alpha only", encoding="utf-8")
    (root / "bin.dat").write_bytes(b"\xff\xfe alpha beta \x00\x81")
    (root / "sub" / "c.txt").write_text("beta\nalpha\n", encoding="utf-8")
    (root / "sub" / "deeper" / "d.md").write_text("gamma", encoding="utf-8")
    return root
