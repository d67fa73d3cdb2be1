"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WINDOW_SIZE = (1024, 576)
TITLE = "Grid Invaders"

BACKGROUND_COLOR = (0, 0, 0)

# Player
PLAYER_SCALE = 0.15
PLAYER_SPEED = 5.0
PLAYER_TILT = 0.15
PLAYER_BOTTOM_MARGIN = 20

# Projectiles
FIRE_RATE = 10
PROJECTILE_RADIUS = 4
PROJECTILE_SPEED = 4.0
PROJECTILE_COLOR = (255, 0, 0)

INVADER_FIRE_RATE = 100
INVADER_PROJECTILE_SIZE = (3, 10)
INVADER_PROJECTILE_SPEED = 2.0
INVADER_PROJECTILE_COLOR = (255, 255, 255)

# Invaders and grids
INVADER_SCALE = 1.0
INVADER_COLOR = (186, 160, 222)  # #BAA0DE
CELL_SIZE = 30
GRID_ROWS = (2, 7)  # [min, max)
GRID_COLS = (2, 12)
GRID_SPEED = 1.0
GRID_DROP = 30.0
GRID_FIRST_INTERVAL = (500, 1000)
GRID_INTERVAL = (500, 1500)
SCORE_PER_INVADER = 10

# Particles
STAR_COUNT = 100
STAR_SPEED = 0.3
STAR_MAX_RADIUS = 2.0
STAR_COLOR = (255, 255, 255)
EXPLOSION_PARTICLES = 15
EXPLOSION_MAX_RADIUS = 3.0
PLAYER_EXPLOSION_COLOR = (255, 0, 0)
FADE_RATE = 0.005

# Seconds between the player being hit and the world freezing
FREEZE_DELAY = 2.0

PLAYER_ASSET = "spaceship.png"
INVADER_ASSET = "invader.png"
