"""Command-line check for a straight water path between two positions.

Example:
    baleen-trace --region "Stellwagen Bank" --mask stellwagen.npy --from -70.45 42.30 --to -70.15 42.55

Exit status: 0 path found, 1 blocked by land, 2 off-grid or bad extent.
"""
import argparse
import logging
import sys

from baleen.whale_abm import config
from baleen.whale_abm.geodesy import GridExtent
from baleen.whale_abm.navigator import WaterNavigator
from baleen.whale_abm.results import NO_PATH, OUT_OF_BOUNDS, ExtentConfigurationError
from baleen.whale_abm.water_mask import WaterMask

log = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='baleen-trace',
        description='Trace a water-only straight path between two lon/lat points.')
    area = parser.add_mutually_exclusive_group(required=True)
    area.add_argument('--region', choices=sorted(config.WHALE_REGIONS),
                      help='named study area from WHALE_REGIONS')
    area.add_argument('--bounds', nargs=4, type=float, metavar=('MINX', 'MINY', 'MAXX', 'MAXY'),
                      help='explicit lon/lat bounding box')
    parser.add_argument('--mask', required=True,
                        help='.npy boolean water mask or depth grid, row 0 = south')
    parser.add_argument('--north-up', action='store_true', help='mask row 0 is the northern edge')
    parser.add_argument('--min-depth', type=float, default=0.0,
                        help='depth above which a cell is water (depth grids only)')
    parser.add_argument('--km-per-cell', type=float, default=config.DEFAULT_KM_PER_CELL)
    parser.add_argument('--from', dest='start', nargs=2, type=float, metavar=('LON', 'LAT'), required=True)
    parser.add_argument('--to', dest='end', nargs=2, type=float, metavar=('LON', 'LAT'), required=True)
    parser.add_argument('--verbose', '-v', action='store_true', help='log projection and trace details')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        config.configure_logging(logging.DEBUG)

    if args.region:
        bounds = config.WHALE_REGIONS[args.region]
    else:
        bounds = dict(zip(('minx', 'miny', 'maxx', 'maxy'), args.bounds))
    try:
        extent = GridExtent.from_bounds(bounds, args.km_per_cell)
    except ExtentConfigurationError as e:
        print(f'invalid grid extent: {e}', file=sys.stderr)
        return 2

    mask = WaterMask.load(args.mask, min_depth=args.min_depth, north_up=args.north_up)
    nav = WaterNavigator(extent, mask)
    log.debug('grid %d x %d cells at %.3f km, %.1f%% water',
              extent.n_cols, extent.n_rows, extent.km_per_cell, 100.0 * mask.water_fraction)

    start, end = args.start, args.end
    print(f'distance: {nav.distance_between_km(*start, *end):.3f} km')
    for label, point in (('from', start), ('to', end)):
        print(f'{label}: cell {nav.cell_for_point(*point)!r}')

    path = nav.trace_between(start, end)
    if path is OUT_OF_BOUNDS:
        print('result: out of bounds')
        return 2
    if path is NO_PATH:
        print('result: no water path')
        print('land: ' + ' '.join(f'{c},{r}' for c, r in nav.land_crossed(start, end)))
        return 1
    print(f'result: {len(path)} cells')
    print(' '.join(f'{c},{r}' for c, r in path))
    return 0


if __name__ == '__main__':
    sys.exit(main())
