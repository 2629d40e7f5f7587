import argparse
import logging

import numpy as np

from .config import build_group, build_scheme, load_cfg, setup_logging
from .errors import DiscreteLogError
from .utils.timing import timed

logger = logging.getLogger(__name__)


def draw_vector(rng, bounds, length):
    lo, hi = bounds
    return rng.integers(lo, hi, size=length, endpoint=True).tolist()


def run_trial(scheme, x, y):
    p, g = scheme.params.p, scheme.params.g

    with timed() as t:
        sk = scheme.key_derive(y)
        ct = scheme.encrypt(x)
        decrypted = scheme.decrypt(ct)

    # desired result g^<x,y>, computed without the scheme
    ip = int(np.dot(np.asarray(x, dtype=object), np.asarray(y, dtype=object)))
    expected = pow(g, ip, p)

    bound = ip if 0 <= ip <= p - 2 else None
    try:
        recovered = scheme.recover_inner_product(decrypted, bound=bound)
    except DiscreteLogError:
        recovered = None

    print("p:", p, "g:", g)
    print("x:", x)
    print("y:", y)
    print("sk_y:", sk.sk_y)
    print("ciphertext: c0:", ct.c0, "c1:", list(ct.c1))
    print("<x, y> (expected):", ip)
    print("g^<x, y> (expected):", expected)
    print("g^<x, y> (decrypted):", decrypted)
    print("<x, y> (recovered):", recovered)

    return {
        "x": x,
        "y": y,
        "inner_product": ip,
        "expected": expected,
        "decrypted": decrypted,
        "recovered": recovered,
        "match": expected == decrypted,
        "seconds": t.elapsed,
    }


def run(cfg, group_rng=None):
    params = build_group(cfg, rng=group_rng)
    scheme = build_scheme(cfg, params)
    for info in scheme.info():
        print(f"client {info.index + 1} public key: {info.public_key}")

    rng = np.random.default_rng(cfg.get("seed"))
    demo = cfg["demo"]
    results = []
    for trial in range(demo.get("trials", 1)):
        y = draw_vector(rng, demo["y_range"], scheme.length)
        x = draw_vector(rng, demo["x_range"], scheme.length)
        res = run_trial(scheme, x, y)
        if not res["match"]:
            logger.warning("trial %d: decrypted element does not match g^<x,y>", trial)
        results.append(res)
    return results


def main(argv=None):
    ap = argparse.ArgumentParser(description="IPFE (DDH) demo run")
    ap.add_argument("--cfg", action="append", default=None,
                    help="YAML config file; may be given more than once")
    args = ap.parse_args(argv)

    cfg = load_cfg(args.cfg or [])
    setup_logging(cfg)
    results = run(cfg)
    ok = all(r["match"] for r in results)
    print(f"{sum(r['match'] for r in results)}/{len(results)} trials matched")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
