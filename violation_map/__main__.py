"""Agrupa infrações de trânsito por centróide fixo e gera o mapa por quadrante."""

import argparse
import sys
from itertools import chain, count
from pathlib import Path
from typing import List, Optional, Sequence

from .clustering import QUADRANT_BASES, cluster_violations
from .config import CENTROIDS, QUADRANT_CENTER, REGION_COLORS, load_centroids
from .errors import InvalidConfiguration, UnassignablePoint
from .loader import load_violations
from .map_view import build_base_map, render_groups
from .models import Centroid, GroupingResult, QuadrantCenter

OUTPUT_DIR = Path("output")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    print("[1/4] Carregando infrações")
    try:
        points = load_violations(args.data)
    except ValueError as exc:
        print(f"Arquivo de dados inválido ({args.data}): {exc}", file=sys.stderr)
        return 2
    try:
        centroids = load_centroids(args.centroids) if args.centroids else list(CENTROIDS)
    except (InvalidConfiguration, ValueError) as exc:
        print(f"Configuração inválida: {exc}", file=sys.stderr)
        return 2

    print(f"[2/4] Atribuindo {len(points)} pontos a {len(centroids)} centróides")
    center = QuadrantCenter(longitude=args.center_lon, latitude=args.center_lat)
    try:
        result = cluster_violations(
            points,
            centroids,
            center=center,
            quadrant_basis=args.quadrant_basis,
            strict=args.strict,
        )
    except InvalidConfiguration as exc:
        print(f"Configuração inválida: {exc}", file=sys.stderr)
        return 2
    except UnassignablePoint as exc:
        print(f"Lote abortado: {exc}", file=sys.stderr)
        return 1

    report_excluded(result.excluded)

    print("[3/4] Desenhando grupos")
    folium_map = build_base_map()
    render_groups(folium_map, result, REGION_COLORS, heatmap=args.heatmap)
    print_group_stats(result, centroids)

    print("[4/4] Gerando mapa")
    args.output_dir.mkdir(parents=True, exist_ok=True)
    output_file = next_available_map(args.output_dir)
    folium_map.save(str(output_file))
    print(f"\nMapa salvo em {output_file}.")
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mapa de infrações por centróide em Goa")
    parser.add_argument(
        "--data",
        type=Path,
        default=Path("data.csv"),
        help="CSV com longitude, latitude e campos livres (vehicleNumber, violations)",
    )
    parser.add_argument(
        "--centroids",
        type=Path,
        default=None,
        help="CSV com name, longitude, latitude (padrão: cidades de Goa)",
    )
    parser.add_argument(
        "--center-lon",
        type=float,
        default=QUADRANT_CENTER.longitude,
        help="Longitude do ponto médio dos quadrantes",
    )
    parser.add_argument(
        "--center-lat",
        type=float,
        default=QUADRANT_CENTER.latitude,
        help="Latitude do ponto médio dos quadrantes",
    )
    parser.add_argument(
        "--quadrant-basis",
        choices=QUADRANT_BASES,
        default="first_point",
        help="Coordenada usada para rotular o grupo",
    )
    parser.add_argument(
        "--heatmap",
        action="store_true",
        help="Adiciona camada de densidade de pontos",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Aborta se algum ponto não puder ser atribuído",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_DIR,
        help="Diretório do HTML gerado",
    )
    args = parser.parse_args(argv)
    if not args.data.exists():
        parser.error(f"arquivo de dados não encontrado: {args.data}")
    if args.centroids is not None and not args.centroids.exists():
        parser.error(f"arquivo de centróides não encontrado: {args.centroids}")
    return args


def report_excluded(excluded: List[UnassignablePoint]) -> None:
    if not excluded:
        return
    print(f"Aviso: {len(excluded)} ponto(s) ignorado(s):", file=sys.stderr)
    for error in excluded:
        print(f"  - {error}", file=sys.stderr)


def print_group_stats(result: GroupingResult, centroids: Sequence[Centroid]) -> None:
    print("\nInfrações por centróide:")
    by_name = result.by_name()
    for name, group in by_name.items():
        print(f"{name}: {len(group)} ({group.quadrant.value})")
    empty = [c.name for c in centroids if c.name not in by_name]
    if empty:
        print(f"Sem pontos: {', '.join(empty)}")


def next_available_map(output_dir: Path, stem: str = "map") -> Path:
    """Primeiro ``stem.html`` livre, depois ``stem_1.html``, ``stem_2.html``..."""

    candidates = chain([f"{stem}.html"], (f"{stem}_{n}.html" for n in count(1)))
    return next(
        output_dir / name for name in candidates if not (output_dir / name).exists()
    )


if __name__ == "__main__":
    sys.exit(main())
