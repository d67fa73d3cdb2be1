"""
This is the main file to run the game.
It imports the run function from the grid_invaders app and runs it.
"""

from grid_invaders.app import run

if __name__ == "__main__":
    run()
