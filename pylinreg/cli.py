"""
Command line interface for pylinreg.

Modes:
  learn         Fit a model on a features file, report learn RMSE and R²
  predict       Apply a saved model to a features file
  cv            K-fold cross-validation of one method
  research      Cross-validate several methods on progressively injured pools
  injure-pool   Print a features file with feature -> feature·factor + offset
  to-vw         Print a features file in VowpalWabbit format
  to-svmlight   Print a features file in SVMLight format

Usage:
  pylinreg learn --features learn.tsv --model model.txt --method welford_lr
  pylinreg predict --features test.tsv --model model.txt
  pylinreg cv --features learn.tsv --folds 5 --runs 3 --verbose cv
  pylinreg research --features learn.tsv --methods fast_lr welford_lr
"""

import argparse
import sys
import warnings
from typing import Sequence

from pylinreg.core.exceptions import PyLinRegError, DimensionError
from pylinreg.core.methods import ALL_METHODS, DEFAULT_METHOD
from pylinreg.core.compute.timing import timed
from pylinreg.evaluation.crossval import cross_validation
from pylinreg.evaluation.research import research
from pylinreg.pool.pool import Pool
from pylinreg.regression.model import LinearModel
from pylinreg.regression.solvers import fit

# Method name column width in the research table
_NAME_WIDTH = 47


def _read_pool(args: argparse.Namespace) -> Pool:
    return Pool.from_features_file(args.features, use_weights=args.use_weights)


def _run_learn(args: argparse.Namespace) -> int:
    with timed() as timer:
        pool = _read_pool(args)
    print(f"pool read in {timer.result()['total_seconds']:.3f}s", file=sys.stderr)

    X, y, weights = pool.arrays()
    solution = fit(X, y, weights, method=args.method)
    print(f"model learned in {solution.timing['total_seconds']:.3f}s", file=sys.stderr)
    for message in solution.warnings:
        warnings.warn(message, RuntimeWarning)

    if args.model:
        solution.model.save(args.model)

    print(f"learn rmse: {solution.rmse:.6g}")
    print(f"learn R^2:  {solution.r_squared:.6g}")
    return 0


def _run_predict(args: argparse.Namespace) -> int:
    pool = _read_pool(args)
    model = LinearModel.load(args.model)
    if len(pool) and pool.features_count != model.n_features:
        raise DimensionError(
            f"model has {model.n_features} features, pool has {pool.features_count}",
            expected=model.n_features,
            actual=pool.features_count,
        )

    out = sys.stdout
    for instance in pool:
        prediction = model.prediction(instance.features)
        out.write(
            f"{instance.query_id}\t{instance.goal:.20g}\t{instance.url}\t"
            f"{instance.weight:.20g}\t{prediction:.20g}\n"
        )
    return 0


def _run_cv(args: argparse.Namespace) -> int:
    pool = _read_pool(args)
    result = cross_validation(pool, args.folds, args.runs, args.method, seed=args.seed)

    multiple_runs = args.runs > 1
    for run, (fold_scores, run_score) in enumerate(zip(result.fold_scores, result.run_scores)):
        prefix = f"run #{run}, " if multiple_runs else ""
        if args.verbose == 'folds':
            for fold, score in enumerate(fold_scores):
                print(f"    {prefix}fold #{fold}: R^2 = {score:.6g}")
        if args.verbose != 'overall':
            print(f"{prefix}CV R^2: {run_score:.6g}")

    if multiple_runs or args.verbose == 'overall':
        print(f"CV R^2 over {args.runs} runs: {result.mean_determination_coefficient:.6g}")
    print(f"learning time: {result.learning_time_seconds:.3f}s", file=sys.stderr)
    return 0


def _run_research(args: argparse.Namespace) -> int:
    pool = _read_pool(args)
    result = research(
        pool,
        args.methods,
        tasks=args.tasks,
        degrade=args.degrade,
        folds=args.folds,
        runs=args.runs,
        seed=args.seed,
    )

    for task in result.tasks:
        print(f"injure factor: {task.injure_factor:g}")
        print(f"injure offset: {task.injure_offset:g}")
        for method in result.methods:
            cv = task.results[method]
            print(
                f"   {method:<{_NAME_WIDTH}}"
                f"time: {cv.learning_time_seconds:.5g}    "
                f"R^2: {cv.mean_determination_coefficient:.5g}"
            )
        print()

    print("full learning time:")
    for method in result.methods:
        print(f"   {method:<{_NAME_WIDTH}}{result.total_learning_time(method):.5g}s")
    return 0


def _run_injure_pool(args: argparse.Namespace) -> int:
    pool = _read_pool(args)
    pool.injured(args.injure_factor, args.injure_offset).write_features(sys.stdout)
    return 0


def _run_to_vw(args: argparse.Namespace) -> int:
    _read_pool(args).write_vowpal_wabbit(sys.stdout)
    return 0


def _run_to_svmlight(args: argparse.Namespace) -> int:
    _read_pool(args).write_svm_light(sys.stdout)
    return 0


def _add_pool_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--features', '-f', required=True, help='features file path')
    parser.add_argument(
        '--use-weights',
        action='store_true',
        help='take instance weights from the file (default: every weight is 1)',
    )


def _add_cv_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--folds', type=int, default=5, help='cross-validation folds count')
    parser.add_argument('--runs', type=int, default=1, help='cross-validation runs count')
    parser.add_argument('--seed', type=int, default=None, help='fold shuffle seed')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pylinreg',
        description='Incremental, numerically stable linear regression',
    )
    subparsers = parser.add_subparsers(dest='mode', required=True, metavar='mode')

    learn = subparsers.add_parser('learn', help='learn a model')
    _add_pool_arguments(learn)
    learn.add_argument('--model', '-m', default=None, help='resulting model path')
    learn.add_argument('--method', choices=ALL_METHODS, default=DEFAULT_METHOD, help='learning method')
    learn.set_defaults(handler=_run_learn)

    predict = subparsers.add_parser('predict', help='apply a model')
    _add_pool_arguments(predict)
    predict.add_argument('--model', '-m', required=True, help='model path')
    predict.set_defaults(handler=_run_predict)

    cv = subparsers.add_parser('cv', help='cross-validate a learning method')
    _add_pool_arguments(cv)
    cv.add_argument('--method', choices=ALL_METHODS, default=DEFAULT_METHOD, help='learning method')
    _add_cv_arguments(cv)
    cv.add_argument(
        '--verbose',
        choices=('folds', 'cv', 'overall'),
        default='folds',
        help='report every fold, every run, or only the overall score',
    )
    cv.set_defaults(handler=_run_cv)

    research_parser = subparsers.add_parser('research', help='compare methods on injured pools')
    _add_pool_arguments(research_parser)
    research_parser.add_argument(
        '--methods',
        nargs='+',
        choices=ALL_METHODS,
        default=list(ALL_METHODS),
        help='learning methods to compare',
    )
    research_parser.add_argument('--tasks', type=int, default=5, help='number of research tasks')
    research_parser.add_argument('--degrade', type=float, default=0.1, help='task-to-task degrade level')
    _add_cv_arguments(research_parser)
    research_parser.set_defaults(handler=_run_research)

    injure = subparsers.add_parser('injure-pool', help='print an injured features file')
    _add_pool_arguments(injure)
    injure.add_argument(
        '--injure-factor', type=float, default=1e-3,
        help='pool injure factor, feature = feature * factor + offset',
    )
    injure.add_argument(
        '--injure-offset', type=float, default=1e3,
        help='pool injure offset, feature = feature * factor + offset',
    )
    injure.set_defaults(handler=_run_injure_pool)

    to_vw = subparsers.add_parser('to-vw', help='convert to VowpalWabbit format')
    _add_pool_arguments(to_vw)
    to_vw.set_defaults(handler=_run_to_vw)

    to_svmlight = subparsers.add_parser('to-svmlight', help='convert to SVMLight format')
    _add_pool_arguments(to_svmlight)
    to_svmlight.set_defaults(handler=_run_to_svmlight)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except (PyLinRegError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
