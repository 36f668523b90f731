"""
Post-deployment batch simulation.
Sends N requests with random passengers to the running API, collects the
predictions and error responses, and logs a summary report.

Usage:
    python monitoring/simulate_requests.py --n 50 --url http://localhost:8000
"""

import argparse
import json
import random
import time
from datetime import datetime, timezone

import requests

TICKET_CLASSES = [1, 2, 3]
GENDERS = ["male", "female"]
PORTS = ["C", "Q", "S"]


def make_random_passenger(rng: random.Random) -> dict:
    """Random form values inside the form ranges (0.5 steps for age and fare)."""
    return {
        "ticket_class": rng.choice(TICKET_CLASSES),
        "gender": rng.choice(GENDERS),
        "age": rng.randint(0, 160) / 2,
        "siblings_or_spouses": float(rng.randint(0, 8)),
        "parents_or_children": float(rng.randint(0, 6)),
        "fare": rng.randint(0, 1024) / 2,
        "port": rng.choice(PORTS),
    }


def summarize(results: list, errors: dict, n: int) -> dict:
    """Build the report dict from (label, confidence, latency) tuples."""
    total = len(results)
    report = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_requests": n,
        "successful": total,
        "errors": errors,
    }
    if not total:
        return report

    latencies = sorted(l for _, __, l in results)
    survived = sum(1 for label, _, __ in results if label == "Survive")
    report.update({
        "survive_rate": round(survived / total, 4),
        "avg_confidence": round(sum(c for _, c, __ in results) / total, 4),
        "avg_latency_ms": round(sum(latencies) / total * 1000, 2),
        "p95_latency_ms": round(latencies[int(0.95 * (total - 1))] * 1000, 2),
    })
    return report


def run_simulation(base_url: str, n: int, seed: int = 42):
    predict_url = f"{base_url}/predict"
    health_url  = f"{base_url}/health"

    # Check health first
    resp = requests.get(health_url, timeout=5)
    resp.raise_for_status()
    print(f"[Health] {resp.json()}\n")

    rng = random.Random(seed)
    results = []   # (label, confidence, latency)
    errors = {}    # status code -> count

    for i in range(n):
        passenger = make_random_passenger(rng)

        start = time.perf_counter()
        try:
            r = requests.post(predict_url, json=passenger, timeout=10)
            latency = time.perf_counter() - start

            if r.status_code == 200:
                data = r.json()
                results.append((data["label"], data["confidence"], latency))
                print(
                    f"  [{i+1:02d}/{n}] class={passenger['ticket_class']} "
                    f"sex={passenger['gender']:<6} age={passenger['age']:>4}  "
                    f"pred={data['label']:<16} conf={data['confidence']:.4f}  "
                    f"latency={latency*1000:.1f}ms"
                )
            else:
                errors[str(r.status_code)] = errors.get(str(r.status_code), 0) + 1
                print(f"  [{i+1:02d}/{n}] ERROR: HTTP {r.status_code} {r.json().get('detail')}")
        except requests.RequestException as e:
            errors["exception"] = errors.get("exception", 0) + 1
            print(f"  [{i+1:02d}/{n}] EXCEPTION: {e}")

    report = summarize(results, errors, n)

    # ── Performance Summary ────────────────────────────────────────────────────
    print("\n" + "=" * 55)
    print("  Post-Deployment Prediction Report")
    print(f"  Generated: {report['timestamp']}")
    print("=" * 55)
    print(f"  Total requests     : {n}")
    print(f"  Successful         : {report['successful']}")
    print(f"  Errors             : {errors or 'none'}")
    if report["successful"]:
        print(f"  Survive rate       : {report['survive_rate']*100:.1f}%")
        print(f"  Avg confidence     : {report['avg_confidence']:.4f}")
        print(f"  Avg latency        : {report['avg_latency_ms']:.1f} ms")
        print(f"  P95 latency        : {report['p95_latency_ms']:.1f} ms")
    print("=" * 55)

    # ── Save JSON report ───────────────────────────────────────────────────────
    report_path = "monitoring/prediction_report.json"
    with open(report_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n  Report saved → {report_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate prediction requests")
    parser.add_argument("--n",    type=int, default=50, help="Number of requests")
    parser.add_argument("--url",  type=str, default="http://localhost:8000")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()
    run_simulation(args.url, args.n, args.seed)
