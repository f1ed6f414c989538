from __future__ import annotations

from flask import Flask, send_from_directory

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/uploads/<path:filename>", endpoint="uploaded_file")
    def uploaded_file(filename: str):
        return send_from_directory(container.attachment_storage.root / "uploads", filename)
