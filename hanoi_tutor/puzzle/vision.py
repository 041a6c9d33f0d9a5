from __future__ import annotations

import base64
import colorsys
import io
from typing import Iterable, Sequence

from .callstack import format_call
from .env import PuzzleState
from .solver import RecursionStep
from ..vision_types import StateImage


def render_puzzle_image(
    *,
    pegs: Sequence[Sequence[int]],
    n_disks: int,
    size: tuple[int, int] = (640, 360),
    label_pegs: bool = True,
    background: str = "white",
    selected_peg: int | None = None,
    call_labels: Sequence[str] = (),
) -> StateImage:
    try:
        from PIL import Image, ImageDraw, ImageFont
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError(
            "Missing pillow. Install with: pip install 'hanoi-tutor[viz]'"
        ) from exc

    width, height = size
    img = Image.new("RGB", (width, height), background)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    # The call stack panel takes the bottom of the canvas when labels exist.
    board_height = int(height * 0.62) if call_labels else height

    peg_count = max(len(pegs), 1)
    margin_x = max(50, width // 8)
    peg_y_top = int(board_height * 0.2)
    peg_y_bottom = int(board_height * 0.82)
    span = max(1, peg_count - 1)
    peg_x_positions = [
        int(margin_x + i * (width - 2 * margin_x) / span) for i in range(peg_count)
    ]

    if label_pegs:
        for i, x in enumerate(peg_x_positions):
            label = f"Rod {i + 1}"
            bbox = draw.textbbox((0, 0), label, font=font)
            label_w = bbox[2] - bbox[0]
            draw.text(
                (x - label_w / 2, int(board_height * 0.06)),
                label,
                fill="#dc2626" if selected_peg == i else "black",
                font=font,
            )

    disk_h = max(6, int(board_height * 0.05))
    min_w = max(20, int(width * 0.5 / peg_count * 0.3))
    max_w = max(min_w + 10, int(width * 0.8 / peg_count))
    base_height = max(6, int(board_height * 0.03))
    base_top = min(board_height - base_height - 6, peg_y_bottom + 6)
    base_bottom = base_top + base_height
    draw.rectangle(
        [margin_x - 30, base_top, width - margin_x + 30, base_bottom], fill="#1f2937"
    )

    for i, peg in enumerate(pegs):
        x = peg_x_positions[i]
        rod_color = "#dc2626" if selected_peg == i else "#6b7280"
        draw.line((x, peg_y_top, x, peg_y_bottom), fill=rod_color, width=4)
        for j, disk in enumerate(peg):
            ratio = (disk - 1) / (n_disks - 1) if n_disks > 1 else 1
            w = min_w + ratio * (max_w - min_w)
            x0 = x - w / 2
            x1 = x + w / 2
            y1 = peg_y_bottom - j * (disk_h + 4)
            y0 = y1 - disk_h
            hue = 0.6 - 0.55 * ratio
            r, g, b = colorsys.hls_to_rgb(hue, 0.55, 0.65)
            color = (int(r * 255), int(g * 255), int(b * 255))
            draw.rectangle([x0, y0, x1, y1], fill=color, outline="#111827")

    if call_labels:
        line_h = 12
        y = board_height + 8
        for index, label in enumerate(call_labels):
            if y + line_h > height:
                break
            is_current = index == len(call_labels) - 1
            draw.text(
                (16, y),
                label,
                fill="#1d4ed8" if is_current else "#374151",
                font=font,
            )
            y += line_h

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    data = buffer.getvalue()
    b64 = base64.b64encode(data).decode("ascii")
    return StateImage(
        mime_type="image/png",
        data_base64=b64,
        data_url=f"data:image/png;base64,{b64}",
        width=width,
        height=height,
    )


def render_state_image(
    state: PuzzleState | dict[str, object],
    *,
    size: tuple[int, int] = (640, 360),
    label_pegs: bool = True,
    background: str = "white",
    calls: Iterable[RecursionStep] = (),
) -> StateImage:
    selected_peg: int | None = None
    if isinstance(state, PuzzleState):
        pegs = state.pegs
        n_disks = state.n_disks
        selected_peg = state.selected_peg
    else:
        pegs = state.get("pegs")  # type: ignore[assignment]
        n_disks = state.get("n_disks")  # type: ignore[assignment]
    if not isinstance(pegs, Iterable):
        raise ValueError("state.pegs is required to render image")
    if not isinstance(n_disks, int):
        raise ValueError("state.n_disks is required to render image")
    return render_puzzle_image(
        pegs=[list(peg) for peg in pegs],
        n_disks=n_disks,
        size=size,
        label_pegs=label_pegs,
        background=background,
        selected_peg=selected_peg,
        call_labels=[format_call(step) for step in calls],
    )
