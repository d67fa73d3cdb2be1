"""
Grid Invaders game
"""

from __future__ import annotations

import pygame

from grid_invaders import constants
from grid_invaders.assets import AssetLoader, paint_invader, paint_player
from grid_invaders.controls import KeyLatch
from grid_invaders.render import PygameSurface, render_world
from grid_invaders.settings import GameSettings
from grid_invaders.utils import configure_logging, find_assets_root, logger, set_screen
from grid_invaders.world import World


class Game:
    """
    Game class
    """

    def __init__(self, settings: GameSettings):
        """
        :param settings: Window and simulation settings
        :type settings: GameSettings
        """
        logger.debug(f"Initializing {settings.title}")
        self.settings = settings
        self._clock = pygame.time.Clock()
        self._carry_on = True
        pygame.init()

    def _set_screen(self) -> pygame.Surface:
        """
        Set the screen

        :return: pygame.Surface
        :rtype: pygame.Surface
        """
        logger.debug("Setting screen")

        return set_screen(self.settings.title, self.settings.width, self.settings.height)

    def handle_events(self):
        """
        Handle the events

        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")

    def handle_game_logic(self):
        """
        Handle the game logic

        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")

    def draw_stuff(self):
        """
        Draw the stuff

        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")

    def setup(self):
        """
        Build whatever the loop needs, called once before the first frame
        """

    def teardown(self):
        """
        Release resources, called once after the last frame
        """

    def run(self):
        """
        Run the game
        """
        logger.debug("Running the game")

        self.setup()
        try:
            while self._carry_on:
                self._clock.tick(self.settings.fps)
                self.handle_events()
                self.handle_game_logic()
                self.draw_stuff()
        finally:
            self.teardown()
            pygame.quit()


class ScoreBoard:
    """
    Score sink: re-renders its label whenever the world reports a new score.
    """

    def __init__(self, font: pygame.font.Font, color=(255, 255, 255)):
        self._font = font
        self._color = color
        self.score = 0
        self._label = self._render(0)

    def _render(self, score: int) -> pygame.Surface:
        return self._font.render(f"Score: {score}", True, self._color)

    def __call__(self, score: int) -> None:
        self.score = score
        self._label = self._render(score)

    def draw(self, screen: pygame.Surface) -> None:
        screen.blit(self._label, (10, 10))


class GridInvaders(Game):
    """
    Grid Invaders class
    """

    def __init__(self, settings: GameSettings | None = None):
        super().__init__(settings or GameSettings())

        self._screen = self._set_screen()
        self._surface = PygameSurface(self._screen)
        self._latch = KeyLatch()
        self.world = World(settings=self.settings, latch=self._latch)

        self._score_board = ScoreBoard(pygame.font.Font(None, 32))
        self.world.add_score_listener(self._score_board)

        try:
            assets_root = find_assets_root()
        except FileNotFoundError:
            logger.debug("No assets directory, using built-in sprites")
            assets_root = None
        self._loader = AssetLoader(assets_root)

    def setup(self):
        """
        Kick off sprite loads; the world runs without them until they land
        """
        self._loader.request(
            constants.PLAYER_ASSET,
            self.world.attach_player_sprite,
            scale=constants.PLAYER_SCALE,
            painter=paint_player,
        )
        self._loader.request(
            constants.INVADER_ASSET,
            self.world.attach_invader_sprite,
            scale=constants.INVADER_SCALE,
            painter=paint_invader,
        )

    def teardown(self):
        self._loader.shutdown()

    def handle_events(self):
        """
        Handle the events
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self._carry_on = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._carry_on = False
            else:
                self._latch.handle_event(event)

    def handle_game_logic(self):
        """
        Handle the game logic
        """
        self._loader.poll()
        self.world.tick()

    def draw_stuff(self):
        """
        Draw the stuff
        """
        if self.world.is_frozen:
            # last frame stays on screen
            return
        render_world(self._surface, self.world)
        self._score_board.draw(self._screen)
        pygame.display.flip()


def run(settings_data: dict | None = None):
    """
    Main entry point for Grid Invaders.

    - Builds settings from ``settings_data`` (window + simulation sections).
    - Opens the window and runs until it is closed.
    """
    w_width, w_height = constants.WINDOW_SIZE

    # NOTE: kept as a dict so yaml or cli based configuration can feed it later.
    settings_data = settings_data or {
        "window": {
            "width": w_width,
            "height": w_height,
            "title": constants.TITLE,
            "fps": constants.FPS,
        },
        "log_level": "INFO",
    }
    settings = GameSettings.from_dict(settings_data)
    configure_logging(settings.log_level)

    logger.info("Starting Grid Invaders...")
    logger.info(settings.to_dict())
    GridInvaders(settings).run()


if __name__ == "__main__":
    run()
