# diskpack/render.py
# pygame 기반 보기 창. 원판 상태를 읽기만 하고 물리 계산에는 관여하지 않음
import typing

import pygame
import numpy as np

from diskpack.packing import PackingController
from diskpack.world import World


class Camera:
    def __init__(self, center=(0.0, 0.0), zoom=50.0):
        self.center = np.array(center, dtype=float)
        self.zoom = float(zoom)

    def world_to_screen(self, p_xy, screen_wh):
        W, H = screen_wh
        x, y = float(p_xy[0]), float(p_xy[1])
        sx = W / 2 + (x - self.center[0]) * self.zoom
        sy = H / 2 - (y - self.center[1]) * self.zoom
        return int(sx), int(sy)

    def fit(self, Lx, Ly, screen_wh, margin=0.9):
        W, H = screen_wh
        self.center = np.array([0.5 * Lx, 0.5 * Ly], dtype=float)
        self.zoom = margin * min(W / Lx, H / Ly)

    def zoom_at(self, factor):
        self.zoom = max(5.0, min(5000.0, self.zoom * factor))


class DiskRenderer:
    """원판과 상자를 그림"""
    def __init__(self, screen, cam: Camera, font):
        self.screen = screen
        self.cam = cam
        self.font = font

    def draw_box(self, box, color=(120, 190, 120)):
        wh = self.screen.get_size()
        pts = [self.cam.world_to_screen(p, wh) for p in [(0, 0), (box.Lx, 0), (box.Lx, box.Ly), (0, box.Ly)]]
        pygame.draw.polygon(self.screen, color, pts, width=2)

    def draw_disks(self, disks, color=(80, 120, 235)):
        wh = self.screen.get_size()
        for d in disks:
            c = self.cam.world_to_screen(d.r, wh)
            Rpx = max(1, int(d.R * self.cam.zoom))
            pygame.draw.circle(self.screen, color, c, Rpx)

    def draw_text(self, x, y, s, color=(220, 220, 220)):
        surf = self.font.render(s, True, color)
        self.screen.blit(surf, (x, y))
        return y + surf.get_height() + 2


def run_viewer(sim: typing.Union[World, PackingController], on_step=None, fps: int = 60, size=(900, 900)) -> None:
    """창을 닫거나 시뮬레이션이 멈출 때까지 프레임마다 sim.step() 호출
    on_step 은 World 의 Verlet 스텝마다 불림 (기록용)
    """
    pygame.init()
    screen = pygame.display.set_mode(size)
    pygame.display.set_caption("Packing Problem")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 18)

    cam = Camera()
    cam.fit(sim.params.Lx, sim.params.Ly, size)
    view = DiskRenderer(screen, cam, font)

    paused = False
    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_SPACE:
                    paused = not paused
                elif ev.key in (pygame.K_EQUALS, pygame.K_PLUS):
                    cam.zoom_at(1.15)
                elif ev.key == pygame.K_MINUS:
                    cam.zoom_at(1.0 / 1.15)
            elif ev.type == pygame.MOUSEWHEEL:
                cam.zoom_at(1.15 if ev.y > 0 else 1.0 / 1.15)

        if isinstance(sim, PackingController):
            if not paused and not sim.converged:
                sim.step()
        elif not paused and not sim.should_stop:
            sim.step(on_step)

        screen.fill((245, 245, 245))
        view.draw_box(sim.box)
        view.draw_disks(sim.disks)
        y = view.draw_text(10, 8, f"t = {sim.t:.3f}", (30, 30, 30))
        if isinstance(sim, PackingController):
            h = sim.history
            view.draw_text(10, y, f"cycle {h.cycle_count}  area {h.prev_area:.4f}  stable {h.stable_count}", (30, 30, 30))

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
