# diskpack/errors.py


class DiskPackError(Exception):
    """diskpack 예외의 기반 클래스"""


class ConfigLoadError(DiskPackError):
    """배치 파일을 열거나 읽을 수 없음"""


class LogWriteError(DiskPackError):
    """로그 출력 파일을 열 수 없음"""


class DegenerateGeometryError(DiskPackError):
    """원판이 없거나 두 원판의 중심이 겹침"""


class InfeasiblePackingError(DiskPackError):
    """주어진 상자 안에 겹치지 않게 원판을 배치할 수 없음"""
