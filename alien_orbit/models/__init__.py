from alien_orbit.models.alien import Alien, AlienState, ClassicAlien
from alien_orbit.models.fireball import Fireball, FireballManager
from alien_orbit.models.player import Player, create_players

__all__ = [
    "Alien", "AlienState", "ClassicAlien",
    "Fireball", "FireballManager",
    "Player", "create_players",
]
