#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Vendor TOPSIS Ranking: Main Entry Point
======================================

Usage
-----
    python main.py                          # 5 synthetic vendors
    python main.py answers.csv              # rank vendors from an answer sheet
    python main.py answers.csv --criteria criteria.json
    python main.py --synthetic 8 --no-figures
    python main.py --config config.json

Answer sheet: a ``Vendor`` column plus ``Q1..Qn`` columns holding 0/1
(blank = unanswered).
"""

import sys


def _option(args, flag):
    """Value following ``flag`` in ``args``, or None."""
    if flag in args:
        i = args.index(flag)
        if i + 1 >= len(args):
            raise SystemExit(f"{flag} needs a value")
        return args[i + 1]
    return None


def main(argv=None) -> int:
    """Configure and execute the vendor ranking pipeline."""
    args = list(sys.argv[1:] if argv is None else argv)
    if '--help' in args or '-h' in args:
        print(__doc__)
        return 0

    # Lazy imports (avoids heavy loading on --help)
    from vendor_topsis import Config, RankingPipeline, TOPSISError

    config_path = _option(args, '--config')
    criteria_path = _option(args, '--criteria')
    n_synthetic = _option(args, '--synthetic')
    option_values = {config_path, criteria_path, n_synthetic}
    positional = [a for a in args if not a.startswith('--') and a not in option_values]
    responses_path = positional[0] if positional else None

    config = Config.load(config_path) if config_path else Config()
    if '--no-figures' in args:
        config.visualization.enabled = False

    pipeline = RankingPipeline(config)
    try:
        result = pipeline.run(
            responses_path,
            criteria_path=criteria_path,
            n_synthetic=int(n_synthetic) if n_synthetic else 5,
        )
    except (TOPSISError, FileNotFoundError) as e:
        pipeline.logger.error(str(e))
        return 1

    print(result.topsis_result.summary())
    return 0


if __name__ == '__main__':
    sys.exit(main())
