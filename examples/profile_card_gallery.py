from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from longtail_ui import (
    PREMIUM,
    ProfileCard,
    card_shadow,
    follow_button,
    profile_card_style,
    profile_verified,
    theme,
)
from longtail_ui.render import PreviewRenderer, render_decoration
from longtail_ui.style.theme import theme_tokens_from_env


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render profile card variants to PNG previews.")
    parser.add_argument("--out-dir", default="out/profile_card_gallery")
    parser.add_argument("--scale", type=float, default=2.0)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    tokens = theme_tokens_from_env()
    card = ProfileCard(username="newuser", followers=42, following=108, bio="Just joined!")
    creator = ProfileCard(username="creator", followers=1_250_000, following=310, bio="Shipping pixels daily.")

    variants = {
        "default": card.render(),
        "verified_gray_border": card.decorate(
            theme(tokens),
            profile_verified(),
            profile_card_style(border_color="#808080", border_width=1),
        ),
        "premium": creator.style(PREMIUM),
        "follow": creator.decorate(
            theme(tokens),
            profile_card_style(),
            card_shadow(),
            follow_button(on_follow=lambda: None),
        ),
    }

    out_dir = Path(args.out_dir)
    renderer = PreviewRenderer(scale=args.scale)
    manifest: dict[str, object] = {}
    for name, decoration in variants.items():
        render_decoration(decoration, renderer)
        path = renderer.save_png(out_dir / f"{name}.png")
        manifest[name] = {"png": str(path), "decoration": decoration.to_dict()}

    manifest_path = out_dir / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    print(manifest_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
