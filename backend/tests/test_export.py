"""Tests for designbridge.export: deployable project skeleton."""

from __future__ import annotations

import json

import pytest

from designbridge.export import (
    DEFAULT_PROJECT_NAME,
    NEXT_CONFIG,
    TAILWIND_CONFIG,
    build_manifest,
    build_project_files,
    to_package_name,
)
from designbridge.inference import generate_application


class TestPackageName:
    @pytest.mark.parametrize("name,expected", [
        ("My Landing Page", "my-landing-page"),
        ("designer-app", "designer-app"),
        ("  Shop!!2025  ", "shop-2025"),
        ("---", DEFAULT_PROJECT_NAME),
        ("", DEFAULT_PROJECT_NAME),
    ])
    def test_slug(self, name, expected):
        assert to_package_name(name) == expected


class TestManifest:
    def test_fields(self):
        manifest = json.loads(build_manifest("Demo"))
        assert manifest["name"] == "demo"
        assert manifest["private"] is True
        assert manifest["scripts"]["build"] == "next build"
        assert set(manifest["dependencies"]) == {"next", "react", "react-dom", "tailwindcss"}

    def test_trailing_newline(self):
        assert build_manifest("demo").endswith("}\n")


class TestProjectFiles:
    def test_file_set(self):
        code = generate_application([{"type": "text", "text": "Hello", "fontSize": 40}])
        files = build_project_files(code, "Demo")
        assert list(files) == ["package.json", "tailwind.config.js", "next.config.js", "app/page.tsx"]
        assert files["app/page.tsx"] == code
        assert files["tailwind.config.js"] == TAILWIND_CONFIG
        assert files["next.config.js"] == NEXT_CONFIG
        assert "<h1>Hello</h1>" in files["app/page.tsx"]

    def test_default_name(self):
        files = build_project_files("")
        assert json.loads(files["package.json"])["name"] == DEFAULT_PROJECT_NAME
