# diskpack/event.py

from diskpack.disk import Disk


class Event:
    """두 원판의 겹침(접촉) 정보 저장"""
    def __init__(self, disk_a: Disk, disk_b: Disk):
        self.disk_a = disk_a
        self.disk_b = disk_b
        self.normal = (0.0, 0.0)  # 법선 (A -> B 단위벡터)
        self.penetration = 0.0  # 겹침 깊이 (RA + RB - 거리)


class WallEvent:
    """원판과 벽 네 면의 침투 깊이 (양수일 때만 의미 있음)"""
    def __init__(self, disk: Disk, left: float, right: float, bottom: float, top: float):
        self.disk = disk
        self.left = left
        self.right = right
        self.bottom = bottom
        self.top = top

    def penetrations(self):
        return (self.left, self.right, self.bottom, self.top)
