"""
Zoo Demo: two rooms, a fade between them, and the two-tier save.

Demonstrates:
- Scene switching through the transition coordinator
- Temp save carrying state between rooms
- Explicit commit (S) and reset (R)
- Days advancing (D) and "days since fed" counters

Keys:
    SPACE  walk to the other room
    F      feed every animal in the room
    D      end the day
    S      commit the save
    R      delete save data
    ESC    quit

Run: python -m demos.zoo_demo
"""

import logging

import pygame

from roomkeeper.audio.music import MusicPlayer
from roomkeeper.config import SaveConfig
from roomkeeper.core import EventBus, Scene, SceneManager
from roomkeeper.graphics.fade import ScreenFade
from roomkeeper.save import SaveSynchronizer
from roomkeeper.storage import FileByteStore
from roomkeeper.transition import TransitionCoordinator
from roomkeeper.world import DayCounter
from roomkeeper.world.kinds import AnimalState, GateState


# ============================================================================
# ROOMS
# ============================================================================

class Savanna(Scene):
    other = "Aviary"

    def __init__(self):
        super().__init__("Savanna")
        for name in ("Leo", "Nala"):
            self.world.create_entity(name).add(AnimalState(name=name))


class Aviary(Scene):
    other = "Savanna"

    def __init__(self):
        super().__init__("Aviary")
        self.world.create_entity("Polly").add(AnimalState(name="Polly"))
        self.world.create_entity("net").add(GateState(gate_id="net"))


def describe(scene: Scene, days: DayCounter) -> list[str]:
    lines = [f"Day {days.day} - {scene.name}"]
    for entity in scene.world.entities:
        animal = entity.try_get(AnimalState)
        if animal:
            lines.append(
                f"{animal.name}: hunger {animal.hunger}, fed {animal.days_since_fed}d ago, {animal.mood}"
            )
    return lines


# ============================================================================
# MAIN
# ============================================================================

def main():
    logging.basicConfig(level=logging.INFO)
    pygame.init()
    screen = pygame.display.set_mode((640, 360))
    pygame.display.set_caption("roomkeeper zoo")
    font = pygame.font.Font(None, 28)
    clock = pygame.time.Clock()

    config = SaveConfig(save_path="demo_saves")
    bus = EventBus()
    scenes = SceneManager(bus)
    scenes.register("Savanna", Savanna)
    scenes.register("Aviary", Aviary)

    days = DayCounter()
    sync = SaveSynchronizer(FileByteStore(config.save_path, config.suffix), config, day_counter=days, event_bus=bus)
    sync.attach(scenes)
    days.on_new_day(lambda day: sync.increment_days_since())

    fade = ScreenFade(config.fade_duration)
    music = MusicPlayer()
    coordinator = TransitionCoordinator(sync, fade, music, scenes, bus, config.poll_interval)

    sync.boot()
    scenes.load("Savanna")

    running = True
    while running:
        dt = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            scenes.handle_event(event)
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and scenes.current and not coordinator.is_busy:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    coordinator.request_scene(scenes.current.other)
                elif event.key == pygame.K_f:
                    for entity in scenes.current.world.entities:
                        animal = entity.try_get(AnimalState)
                        if animal:
                            animal.hunger = 0
                            animal.days_since_fed = 0
                elif event.key == pygame.K_d:
                    days.advance()
                elif event.key == pygame.K_s:
                    sync.commit_save()
                elif event.key == pygame.K_r:
                    sync.reset_all()
                    sync.load_scene()

        was_fading = fade.is_active
        fade.update(dt)
        music.update()
        coordinator.update(dt)
        scenes.update(dt)
        if not was_fading and fade.progress >= 1.0 and not coordinator.is_busy:
            fade.begin_fade_in()

        screen.fill((30, 60, 30))
        if scenes.current:
            for i, line in enumerate(describe(scenes.current, days)):
                screen.blit(font.render(line, True, (240, 240, 220)), (20, 20 + i * 30))

        if fade.progress > 0:
            overlay = pygame.Surface(screen.get_size())
            overlay.fill((0, 0, 0))
            overlay.set_alpha(int(fade.progress * 255))
            screen.blit(overlay, (0, 0))

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
