import time
import numpy as np
from trust_graph.agents.proximity.agent import ProximityAgent
from trust_graph.models.graph.schema import PaymentGraph
from trust_graph.orchestration.stream import StreamClassifier

def create_random_graph(num_parties=50_000, num_payments=200_000, seed=42):
    rng = np.random.default_rng(seed)
    pairs = rng.integers(0, num_parties, size=(num_payments, 2))
    graph = PaymentGraph()
    for payer, payee in pairs:
        graph.add_edge(int(payer), int(payee))
    return graph.freeze()

def create_stream(num_parties=50_000, length=5_000, seed=7):
    rng = np.random.default_rng(seed)
    pairs = rng.integers(0, num_parties + 1000, size=(length, 2))
    return [f"2016-11-02 09:49:29, {a}, {b}, 1.00, bench" for a, b in pairs]

def run_latency_benchmark(agent, iterations=1000):
    print(f"--- Latency Benchmark ({iterations} queries) ---")

    rng = np.random.default_rng(1)
    pairs = rng.integers(0, agent.graph.vertex_count(), size=(iterations, 2))
    latencies = []

    for i, (payer, payee) in enumerate(pairs):
        start_time = time.perf_counter()
        agent.analyze(int(payer), int(payee))
        end_time = time.perf_counter()

        latencies.append((end_time - start_time) * 1000)

        if (i + 1) % 200 == 0:
            print(f"  Completed {i + 1}/{iterations} queries")

    print("\nLatency Results:")
    print(f"  Mean:   {np.mean(latencies):.3f} ms")
    print(f"  Median: {np.median(latencies):.3f} ms")
    print(f"  P95:    {np.percentile(latencies, 95):.3f} ms")
    print(f"  P99:    {np.percentile(latencies, 99):.3f} ms")
    print("-" * 40)
    return latencies

def run_throughput_benchmark(agent, lines, workers=4):
    print(f"\n--- Throughput Benchmark ({len(lines)} transactions, {workers} workers) ---")

    classifier = StreamClassifier(agent, workers=workers, progress_interval=len(lines) + 1)

    start_time = time.perf_counter()
    classified = sum(1 for _ in classifier.classify_lines(lines))
    total_time = time.perf_counter() - start_time

    throughput = classified / total_time

    print(f"\nThroughput Results:")
    print(f"  Total Time: {total_time:.2f} s")
    print(f"  Throughput: {throughput:.2f} transactions/sec")
    print("-" * 40)
    return throughput

if __name__ == "__main__":
    agent = ProximityAgent(create_random_graph())
    lines = create_stream()
    run_latency_benchmark(agent)
    run_throughput_benchmark(agent, lines, workers=1)
    run_throughput_benchmark(agent, lines, workers=4)
