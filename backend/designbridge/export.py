"""Project skeleton for the deployment hand-off.

Wraps a generated page document in the minimal Next.js + Tailwind file set
the deployment collaborator expects. Pure text in, text out: no file or
network I/O happens here.
"""

from __future__ import annotations

import json
import re
from typing import Dict

DEFAULT_PROJECT_NAME = "designer-app"

PAGE_PATH = "app/page.tsx"
MANIFEST_PATH = "package.json"
STYLE_CONFIG_PATH = "tailwind.config.js"
NEXT_CONFIG_PATH = "next.config.js"

TAILWIND_CONFIG = """\
module.exports = {
  content: ['./app/**/*.{js,ts,jsx,tsx}'],
  theme: { extend: {} },
  plugins: []
}
"""

NEXT_CONFIG = """\
module.exports = {
  reactStrictMode: true
}
"""


def to_package_name(name: str) -> str:
    """'My Landing Page' → 'my-landing-page' (npm-safe, never empty)."""
    slug = re.sub(r"[^a-z0-9._-]+", "-", name.strip().lower()).strip("-._")
    return slug or DEFAULT_PROJECT_NAME


def build_manifest(project_name: str) -> str:
    manifest = {
        "name": to_package_name(project_name),
        "version": "1.0.0",
        "private": True,
        "scripts": {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
        },
        "dependencies": {
            "next": "latest",
            "react": "latest",
            "react-dom": "latest",
            "tailwindcss": "latest",
        },
    }
    return json.dumps(manifest, indent=2) + "\n"


def build_project_files(code: str, project_name: str = DEFAULT_PROJECT_NAME) -> Dict[str, str]:
    """Map of relative path → file content for the generated project."""
    return {
        MANIFEST_PATH: build_manifest(project_name),
        STYLE_CONFIG_PATH: TAILWIND_CONFIG,
        NEXT_CONFIG_PATH: NEXT_CONFIG,
        PAGE_PATH: code,
    }
