"""
Main application module for Forktal.

Contains the ForktalApp class which handles:
- Window setup and main loop
- User input (zoom, pan, reset, pause)
- Feeding frame time into the fractal field
- Presenting the field's RGBA frame
"""

import json
import logging
import os

import pygame

from .fractal import FractalField
from .compute import warmup_jit


logger = logging.getLogger(__name__)


def load_settings():
    """Load settings from settings.json file."""
    settings_path = os.path.join(os.path.dirname(__file__), 'settings.json')
    try:
        with open(settings_path, 'r') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load settings.json: {e}")
        return None


def pan_offsets(pressed, scale_width, scale_height, fraction):
    """
    Turn held arrow keys into a plane offset.

    Right/left move along the real axis, up/down along the imaginary
    axis (up is negative, since row 0 is the top of the frame). Right
    wins over left and up over down when both are held.

    Args:
        pressed: Key state, indexable by pygame key constants
        scale_width, scale_height: Current viewport extents
        fraction: Share of the extent to move per frame

    Returns:
        (x_offset, y_offset)
    """
    if pressed[pygame.K_RIGHT]:
        shift_x = scale_width * fraction
    elif pressed[pygame.K_LEFT]:
        shift_x = -scale_width * fraction
    else:
        shift_x = 0.0

    if pressed[pygame.K_UP]:
        shift_y = -scale_height * fraction
    elif pressed[pygame.K_DOWN]:
        shift_y = scale_height * fraction
    else:
        shift_y = 0.0

    return shift_x, shift_y


class ForktalApp:
    """
    Main application class.

    Owns the pygame window and the event loop; the fractal field does
    all of the computation and paints into self.frame each frame.
    """

    # Default configuration
    DEFAULT_WIDTH = 400   # Field resolution
    DEFAULT_HEIGHT = 300
    DEFAULT_SCALE = 3     # Window pixels per field pixel
    TITLE = "Forktal"
    PAN_FRACTION = 0.1
    FPS = 60

    def __init__(self, width=None, height=None, scale=None, settings=None):
        """
        Initialize the application.

        Args:
            width: Field width in pixels (default 400)
            height: Field height in pixels (default 300)
            scale: Window upscale factor (default 3)
            settings: Dict overriding the defaults (default: settings.json)
        """
        if settings is None:
            settings = load_settings() or {}

        self.width = width or settings.get('width', self.DEFAULT_WIDTH)
        self.height = height or settings.get('height', self.DEFAULT_HEIGHT)
        self.scale = scale or settings.get('scale', self.DEFAULT_SCALE)
        self.title = settings.get('title', self.TITLE)
        self.pan_fraction = settings.get('pan_fraction', self.PAN_FRACTION)
        self.fps = settings.get('fps', self.FPS)

        self.field = FractalField(self.width, self.height)
        self.frame = bytearray(self.width * self.height * 4)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        self.paused = False
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        warmup_jit(self.field.colormap)

        self.running = True
        self.clock.tick()
        while self.running:
            dt_ms = self.clock.tick(self.fps)

            self._handle_events()
            if not self.running:
                break

            self._handle_pan()
            if not self.paused:
                self.field.step(dt_ms / 1000.0)

            self._draw()

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width * self.scale, self.height * self.scale),
            pygame.RESIZABLE
        )
        pygame.display.set_caption(self.title)
        self.clock = pygame.time.Clock()
        logger.info(
            "Opened %dx%d window for a %dx%d field",
            self.width * self.scale, self.height * self.scale,
            self.width, self.height
        )

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_SPACE:
            self.field.zoom()
        elif event.key == pygame.K_r:
            self.field.reset_view()
        elif event.key == pygame.K_p:
            self.paused = not self.paused

    def _handle_pan(self):
        """Shift the view while arrow keys are held."""
        shift_x, shift_y = pan_offsets(
            pygame.key.get_pressed(),
            self.field.scale_width(), self.field.scale_height(),
            self.pan_fraction
        )
        self.field.shift(shift_x, shift_y)

    def _draw(self):
        """Draw the current frame."""
        self.field.draw(self.frame)
        surface = pygame.image.frombuffer(
            self.frame, (self.width, self.height), 'RGBA'
        )
        scaled = pygame.transform.scale(surface, self.screen.get_size())
        self.screen.blit(scaled, (0, 0))

        status = "paused" if self.paused else "running"
        pygame.display.set_caption(
            f"{self.title} - step {self.field.global_step} ({status})"
        )
        pygame.display.flip()


def run(width=None, height=None, scale=None):
    """
    Run Forktal.

    Args:
        width: Field width (default 400)
        height: Field height (default 300)
        scale: Window upscale factor (default 3)
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )
    app = ForktalApp(width, height, scale)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
