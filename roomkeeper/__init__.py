"""
roomkeeper - two-tier save synchronization for scene-based games.

Subpackages:
- core: components, entities, worlds, events and the scene stack
- storage: byte store and codec primitives
- save: save directory, fragments and the synchronization engine
- transition: save-then-fade-then-switch scene coordinator
- audio, graphics, world: reference collaborators (music fades,
  screen fade, day counter)
"""

__version__ = "0.1.0"
