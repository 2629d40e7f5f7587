import copy
import logging

import yaml

from .group import DEMO_G, DEMO_P, GroupParameters
from .ipfe import FunctionalEncryptionScheme

DEFAULT_CFG = {
    "seed": None,
    "logging": {"level": "INFO"},
    "group": {
        "p": DEMO_P,
        "g": DEMO_G,
        "bit_length": 64,
        "generate": False,
        "reps": 50,
        "safe": True,
    },
    "scheme": {"length": 2},
    "demo": {"y_range": [1, 7], "x_range": [1, 72], "trials": 1},
}


def load_cfg(path_list):
    cfg = copy.deepcopy(DEFAULT_CFG)
    for p in path_list:
        with open(p) as f:
            part = yaml.safe_load(f) or {}
        # shallow merge is fine here
        for k, v in part.items():
            if k in cfg and isinstance(cfg[k], dict) and isinstance(v, dict):
                cfg[k].update(v)
            else:
                cfg[k] = v
    return cfg


def setup_logging(cfg):
    level = cfg.get("logging", {}).get("level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(level).upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_group(cfg, rng=None):
    g = cfg["group"]
    if g.get("generate", False):
        return GroupParameters.generate(
            g["bit_length"], reps=g.get("reps", 50), rng=rng, safe=g.get("safe", True)
        )
    return GroupParameters(g["p"], g["g"], rng=rng, bit_length=g["bit_length"], reps=g.get("reps", 50))


def build_scheme(cfg, params):
    return FunctionalEncryptionScheme(cfg["scheme"]["length"], params)
