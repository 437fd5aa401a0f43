import argparse
import logging
import sys

import numpy as np

from diskpack.errors import ConfigLoadError, InfeasiblePackingError
from diskpack.logging_config import setup_logging
from diskpack.packing import PackingController
from diskpack.params import RunParams, load_params
from diskpack.recorder import open_packing_recorder, open_step_recorder
from diskpack.world import World

logger = logging.getLogger("diskpack.main")


def build_parser():
    parser = argparse.ArgumentParser(description="Soft-disk packing simulator")
    parser.add_argument("mode", choices=("simulate", "pack", "view", "view-pack"), help="run mode")
    parser.add_argument("--params", default=None, help="YAML file with run parameters")
    parser.add_argument("--dt", type=float)
    parser.add_argument("--T", type=int, dest="T", help="Verlet steps per invocation")
    parser.add_argument("--N", type=int, dest="N", help="number of disks")
    parser.add_argument("--k", type=float, help="spring constant")
    parser.add_argument("--gamma", type=float, help="linear drag coefficient")
    parser.add_argument("--Lx", type=float)
    parser.add_argument("--Ly", type=float)
    parser.add_argument("--stop-time", type=float, dest="stop_time")
    parser.add_argument("--r-min", type=float, dest="r_min")
    parser.add_argument("--r-max", type=float, dest="r_max")
    parser.add_argument("--in-file", dest="in_file", help="read the initial configuration from this file")
    parser.add_argument("--out-file", dest="out_file")
    parser.add_argument("--max-invocations", type=int, dest="max_invocations")
    parser.add_argument("--max-cycles", type=int, dest="max_cycles")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--instrumented", action="store_true", help="also log energy and bounding box per step")
    parser.add_argument("--log-level", default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))
    parser.add_argument("--log-file", default=None)
    return parser


def resolve_params(args) -> RunParams:
    base = load_params(args.params) if args.params else RunParams()
    overrides = {
        name: getattr(args, name)
        for name in ("dt", "T", "N", "k", "gamma", "Lx", "Ly", "stop_time", "r_min", "r_max",
                     "in_file", "out_file", "max_invocations", "max_cycles", "seed")
    }
    if args.in_file:
        overrides["read_from_file"] = True
    return base.replace(**overrides)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        params = resolve_params(args)
    except (ConfigLoadError, ValueError) as exc:
        logger.error("invalid parameters: %s", exc)
        return 2

    rng = np.random.default_rng(params.seed)
    world = World(params)
    try:
        world.initialize(rng)
    except InfeasiblePackingError as exc:
        logger.error("%s", exc)
        return 1
    logger.info("%d disks in a %.3f x %.3f box", len(world.disks), params.Lx, params.Ly)

    if args.mode in ("simulate", "view"):
        recorder = open_step_recorder(params, args.instrumented)
        try:
            if args.mode == "view":
                from diskpack.render import run_viewer
                run_viewer(world, on_step=recorder)
            else:
                world.run(on_step=recorder)
        finally:
            recorder.close()
        return 0

    if not world.disks:
        logger.error("no disks to pack")
        return 1
    recorder = open_packing_recorder(params, world.disks)
    try:
        controller = PackingController(
            world.disks, params, rng,
            on_cycle=recorder.on_cycle,
            on_converged=recorder.on_converged,
        )
        if args.mode == "view-pack":
            from diskpack.render import run_viewer
            run_viewer(controller)
            finish_packing(controller, recorder)
        else:
            result = controller.run()
            print(f"final area = {result.area:.5f} after {result.cycles} cycles")
    finally:
        recorder.close()
    return 0


def finish_packing(controller, recorder) -> None:
    """보기 창을 수렴 전에 닫아도 최종 위치 블록을 남김"""
    if not controller.converged:
        result = controller.current_result()
        logger.info("viewer closed before convergence, area=%.5f after %d cycles", result.area, result.cycles)
        recorder.on_converged(result)


if __name__ == "__main__":
    sys.exit(main())
