"""A window that shows meshes drawn by the software rasteriser."""

from __future__ import annotations

import struct
import time

import pygame

from .models import Mesh
from .raster import Rasterizer


class RenderEngine:
    """Owns the display window, the event loop timer and a rasteriser."""

    def __init__(self, width: int, height: int, title: str) -> None:
        self.width = width
        self.height = height
        self.title = title
        self.rasterizer = Rasterizer(width, height)
        self.elapsed_time = 0.0
        self._running = False
        self._screen: pygame.Surface | None = None
        self._last_time = 0.0

    def initialize(self) -> None:
        """Open the window. Raises ``RuntimeError`` if the display cannot be opened."""
        try:
            pygame.display.init()
            screen = pygame.display.set_mode((self.width, self.height))
        except pygame.error as exc:
            pygame.display.quit()
            raise RuntimeError(f"could not open the display: {exc}") from exc
        pygame.display.set_caption(self.title)
        self._screen = screen
        self.rasterizer.clear()
        self._last_time = time.monotonic()
        self._running = True

    def shutdown(self) -> None:
        """Close the window; safe to call more than once."""
        self._screen = None
        pygame.display.quit()
        self._running = False

    def should_close(self) -> bool:
        """Return whether the main loop should stop."""
        return not self._running

    def poll_events(self) -> None:
        """Handle pending window events and update ``elapsed_time`` in seconds."""
        self._require_screen()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
        now = time.monotonic()
        self.elapsed_time = now - self._last_time
        self._last_time = now

    def render_mesh(self, mesh: Mesh, rotation_angle: float) -> None:
        """Draw ``mesh`` rotated by ``rotation_angle`` and show the frame."""
        screen = self._require_screen()
        self.rasterizer.render_mesh(mesh, rotation_angle)
        self._present(screen)

    def __enter__(self) -> RenderEngine:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _require_screen(self) -> pygame.Surface:
        if self._screen is None:
            raise RuntimeError("the engine is not initialized")
        return self._screen

    def _present(self, screen: pygame.Surface) -> None:
        pixels = self.rasterizer.pixels
        data = struct.pack(f">{len(pixels)}I", *pixels)
        image = pygame.image.frombuffer(data, (self.width, self.height), "ARGB")
        screen.blit(image, (0, 0))
        pygame.display.flip()