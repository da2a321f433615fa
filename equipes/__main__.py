# equipes/__main__.py
from __future__ import annotations

import argparse
import sys


def _run_exemple(seed: int) -> int:
    # importe tardivement pour ne rien charger quand on affiche juste l’aide
    try:
        from .exemples import run_exemple
    except ImportError as e:
        print("Impossible d’importer equipes.exemples.run_exemple :", e, file=sys.stderr)
        return 1
    return run_exemple(seed)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="equipes",
        description="Outils et exemples pour la répartition en équipes."
    )
    sub = parser.add_subparsers(dest="cmd")

    p_ex = sub.add_parser("exemple", help="Exécute le scénario d’exemple.")
    p_ex.add_argument("--seed", type=int, default=42, help="graine du générateur aléatoire")

    # défaut: si aucune sous-commande n’est fournie, on lance l’exemple
    args = parser.parse_args(argv)
    if not args.cmd:
        return _run_exemple(42)
    return _run_exemple(args.seed)


if __name__ == "__main__":
    raise SystemExit(main())
