import os
import json
import logging
import time
from datetime import datetime

import pandas as pd

from henslib import build_case, compute_targets, solve
from henslib.analysis import solution_stats
from henslib.cases import CASES


def benchmark(case, method, result_dir):
    """Benchmark a synthesis engine on a case study.

    The result file is the JSON representation of the solution statistics and the exchangers.

    Parameters
    ----------
    case : string
        the case study to be solved
    method : string
        the synthesis engine, "greedy" or "cascade"
    result_dir : string
        the directory to store the benchmark results

    Returns
    -------
    dict
        the solution statistics
    """
    hot, cold, min_approach_temp = build_case(case)

    start_time = time.perf_counter()
    exchangers = solve(hot, cold, min_approach_temp, method=method)
    solve_time_ms = (time.perf_counter() - start_time) * 1e3

    stats = solution_stats(
        hot, cold, exchangers, algorithm=method, solve_time_ms=solve_time_ms
    )
    stats["case"] = case
    stats["min_approach_temp"] = min_approach_temp
    stats["hot_utility_target"] = compute_targets(
        hot, cold, min_approach_temp
    ).hot_utility

    with open(os.path.join(result_dir, method + ".json"), "w") as f:
        json.dump(
            {
                "stats": stats,
                "exchangers": [ex._asdict() for ex in exchangers],
            },
            f,
            indent=2,
        )
    return stats


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    instance_list = sorted(CASES)
    method_list = [
        "greedy",
        "cascade",
    ]
    current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    records = []
    for instance in instance_list:
        result_dir = os.path.join("benchmark_result", current_time, instance)
        os.makedirs(result_dir, exist_ok=True)

        print("Benchmarking instance: ", instance)
        for method in method_list:
            records.append(benchmark(instance, method, result_dir))

    summary = pd.DataFrame(records).set_index(["case", "algorithm"])
    summary = summary[
        [
            "cell_count",
            "utility_count",
            "total_load_utilities",
            "hot_utility_target",
            "external_power_saved",
            "solve_time_ms",
        ]
    ]
    summary.to_csv(os.path.join("benchmark_result", current_time, "summary.csv"))
    print(summary)
