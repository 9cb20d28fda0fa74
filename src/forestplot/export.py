"""Save a rendered scene to disk as SVG or PNG."""
from __future__ import annotations

import shutil
import subprocess
import tempfile
from pathlib import Path

from PIL import Image

from common.svg_builder import SvgBuilder


class RasterizeError(RuntimeError):
    pass


def save_svg(scene: SvgBuilder, path: Path) -> Path:
    scene.save(path)
    return path


def _on_white(png_path: Path) -> None:
    # Margins and the axis area are transparent in the SVG.
    with Image.open(png_path) as image:
        rgba = image.convert("RGBA")
    background = Image.new("RGB", rgba.size, (255, 255, 255))
    background.paste(rgba, mask=rgba.getchannel("A"))
    background.save(png_path)


def _render_with_resvg(svg_path: Path, png_path: Path) -> bool:
    resvg = shutil.which("resvg")
    if not resvg:
        return False
    completed = subprocess.run(
        [resvg, str(svg_path), str(png_path)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    return completed.returncode == 0 and png_path.exists()


def _render_with_cairosvg(markup: str, png_path: Path) -> None:
    try:
        import cairosvg
    except ImportError as exc:  # pragma: no cover - depends on env
        raise RasterizeError("cairosvg not installed and resvg not available") from exc
    try:
        cairosvg.svg2png(bytestring=markup.encode("utf-8"), write_to=str(png_path))
    except Exception as exc:  # noqa: BLE001
        raise RasterizeError(f"cairosvg failed: {exc}") from exc


def rasterize_svg_to_png(svg_path: Path, png_path: Path) -> str:
    png_path.parent.mkdir(parents=True, exist_ok=True)
    if _render_with_resvg(svg_path, png_path):
        backend = "resvg"
    else:
        _render_with_cairosvg(svg_path.read_text(), png_path)
        backend = "cairosvg"
    _on_white(png_path)
    return backend


def export_png(scene: SvgBuilder, png_path: Path) -> str:
    """Rasterise an in-memory scene; ``resvg`` needs a file, cairosvg does not."""
    png_path.parent.mkdir(parents=True, exist_ok=True)
    if shutil.which("resvg"):
        with tempfile.TemporaryDirectory() as tmp:
            svg_path = save_svg(scene, Path(tmp) / "forestplot.svg")
            if _render_with_resvg(svg_path, png_path):
                _on_white(png_path)
                return "resvg"
    _render_with_cairosvg(scene.tostring(), png_path)
    _on_white(png_path)
    return "cairosvg"
