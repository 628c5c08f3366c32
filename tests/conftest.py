"""Shared fixtures: a small public folder on disk."""

import pytest


@pytest.fixture
def public_dir(tmp_path):
    """Create a temporary public folder for serving."""
    public = tmp_path / "public"
    public.mkdir()

    (public / "style.css").write_text("body { color: red; }")
    (public / "bundle.js").write_text("console.log('bundle');")
    (public / "data.bin").write_bytes(b"\x00\x01\x02\x03")

    app = public / "app"
    app.mkdir()
    (app / "index.html").write_text("<h1>App</h1>")

    empty = public / "empty"
    empty.mkdir()

    return public
