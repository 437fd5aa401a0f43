# diskpack/config.py
# 시뮬레이션 기본값 및 상수 정의
# 단위 질량(m = 1) 기준 / 길이·시간은 무차원

# 적분 간격 Δt
dt = 0.01

# 호출(invocation) 1회당 Verlet 스텝 수 T
steps_per_invocation = 1

# 호출 횟수 상한 (≈ 2000 × T × dt 만큼의 물리 시간)
max_invocations = 2000


class Particles:
    """원판 개수 및 반지름 범위"""
    N = 30
    r_min = 0.2
    r_max = 0.5
    # 초기 속도 성분 범위 [-0.5, 0.5]
    v_range = 0.5


class Stiffness:
    """힘 관련 계수"""
    k = 1.0e3 # 스프링(반발) 상수
    gamma = 1.0 # 선형 공기저항 계수


class Container:
    """초기 상자 크기"""
    Lx = 10.0
    Ly = 10.0


class Placement:
    """무작위 배치"""
    max_attempts = 10000 # 원판 1개당 재시도 상한


class Packing:
    """상자 축소(패킹) 수렴 판정"""
    stop_time = 10.0 # 사이클 1회의 적분 시간
    eps = 1.0e-3 # 상대 면적 변화 허용치
    max_cycles = 1000
    stable_threshold = 15 # 연속 안정 사이클 수


class Files:
    in_file = "packing_in.txt"
    out_file = "packing_out.csv"


# 거리 0 판정용
EPS = 1e-12
