"""Application configuration via pydantic-settings.

Configuration is loaded from environment variables prefixed with
``RINGCLOCK_`` and/or a ``.env`` file.  Nested models use ``__`` as the
delimiter, e.g. ``RINGCLOCK_FACE__INVERTED=true``.

Sections:

* **face** — layout geometry, marker timeout, inversion, font.
* **output** — where the live face writes its frames.
* **logging** — level, format, optional file sink, rotation.

All durations are in **seconds**; all lengths in **pixels**.
"""

from __future__ import annotations

from typing import Annotated, Literal, Self

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings — nested via composition)
# -------------------------------------------------------------------


class FaceSettings(BaseModel):
    """Clock face geometry and behaviour.

    Defaults reproduce the 144x168 watch layout::

        RINGCLOCK_FACE__OUTER_RADIUS=65
        RINGCLOCK_FACE__MARKER_DELAY_S=3
        RINGCLOCK_FACE__INVERTED=false
    """

    width: Annotated[int, Field(ge=1)] = Field(
        default=144, description="Canvas width."
    )
    height: Annotated[int, Field(ge=1)] = Field(
        default=168, description="Canvas height."
    )
    center_x: int = Field(default=72, description="Clock centre, x.")
    center_y: int = Field(default=74, description="Clock centre, y.")
    outer_radius: Annotated[int, Field(ge=1)] = Field(
        default=65,
        description="Outer radius of the hour ring.",
    )
    outer_thickness: Annotated[int, Field(ge=0)] = Field(
        default=4,
        description="Thickness of the hour ring.",
    )
    inner_radius: Annotated[int, Field(ge=1)] = Field(
        default=55,
        description="Radius of the filled minute wedge.",
    )
    dot_radius: Annotated[int, Field(ge=3)] = Field(
        default=6,
        description=(
            "Radius of the hour pointer dot.  Marker dots and the PM "
            "hole use ``dot_radius - 2``."
        ),
    )
    date_top: int = Field(default=142, description="Top edge of the date label box.")
    date_height: Annotated[int, Field(ge=1)] = Field(
        default=23,
        description="Height of the date label box.",
    )
    marker_delay_s: Annotated[float, Field(gt=0)] = Field(
        default=3.0,
        description="How long hour markers stay visible after a tap.",
    )
    inverted: bool = Field(
        default=False,
        description="Invert black and white on exported frames.",
    )
    font_path: str | None = Field(
        default=None,
        description=(
            "TrueType font for the date label.  ``None`` uses Pillow's built-in font."
        ),
    )
    font_size: Annotated[int, Field(ge=1)] = Field(
        default=22, description="Date font size."
    )

    @model_validator(mode="after")
    def _thickness_within_radius(self) -> Self:
        if self.outer_thickness > self.outer_radius:
            msg = "outer_thickness must not exceed outer_radius"
            raise ValueError(msg)
        return self


class OutputSettings(BaseModel):
    """Frame output for the live face."""

    path: str = Field(
        default="ringclock.png",
        description="PNG file rewritten on every redraw.",
    )


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    ``format`` is ``"json"`` (one JSON object per line) or ``"text"``
    (timestamped human-readable lines).
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format.",
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description="Maximum log file size in megabytes before rotation.",
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for ringclock.

    Example ``.env``::

        RINGCLOCK_CONNECTED=false
        RINGCLOCK_FACE__INVERTED=true
        RINGCLOCK_OUTPUT__PATH=/tmp/face.png
        RINGCLOCK_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="RINGCLOCK_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    face: FaceSettings = Field(
        default_factory=FaceSettings,
        description="Clock face layout and behaviour.",
    )
    output: OutputSettings = Field(
        default_factory=OutputSettings,
        description="Frame output.",
    )
    connected: bool = Field(
        default=True,
        description="Connectivity reported by the static connectivity adapter.",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
