#!/usr/bin/env python3
"""
Demo script for the RAG LRU cache.

This script walks through a miss, a hit, an eviction and a reset using the
generator configured in the environment (GENERATOR_BACKEND, GENERATION_MODEL).
"""

import asyncio
import logging

from rag_cache import KeywordRetriever, PipelineService, ResponseSource
from rag_cache.api.dependencies import build_generator
from rag_cache.models import PipelineMetrics


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_metrics(metrics: PipelineMetrics) -> None:
    """Print a metrics summary."""
    print(
        f"""
Performance Summary:
====================
Total Queries:        {metrics.total_queries}
Cache Hits:           {metrics.cache_hits} ({metrics.hit_ratio:.1%})
Cache Misses:         {metrics.cache_misses}
Evictions:            {metrics.eviction_count}
Avg Cache Latency:    {metrics.avg_cache_latency_ms:.2f}ms
Avg LLM Latency:      {metrics.avg_llm_latency_ms:.0f}ms
Cache Usage:          {metrics.current_cache_size}/{metrics.capacity}
"""
    )


async def demo_hit_and_miss(pipeline: PipelineService) -> None:
    """Ask the same question twice."""
    print_section("Cache Miss, then Hit")

    for attempt in (1, 2):
        result = await pipeline.process_query("How does LRU eviction work?")
        print(f"\n  Attempt {attempt}: {result.source.value.upper()} in {result.latency_ms:.1f}ms")
        print(f"  Context passages: {len(result.retrieved_context)}")
        print(f"  Response: {result.response[:100]}...")
        if result.source is ResponseSource.SYSTEM:
            print("  → Is the generator reachable? Try: ollama serve")
            print("    (or set GENERATOR_BACKEND=gemini and GEMINI_API_KEY)")
            return


async def demo_eviction(pipeline: PipelineService) -> None:
    """Overflow the cache so the oldest entry is evicted."""
    print_section(f"Eviction (capacity {pipeline.capacity})")

    questions = [
        "What is the system architecture?",
        "Tell me about Gemini 3 Pro",
        "How is retrieval quality measured?",
    ]
    for question in questions:
        result = await pipeline.process_query(question)
        print(f"  {result.source.value:<10} {question}")

    print(f"\n  Recency order (oldest first): {pipeline.cache.keys()}")


async def main() -> None:
    """Run all demos."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("\n🚀 RAG LRU Cache Demo")
    print("=" * 70)

    pipeline = PipelineService.create(
        retriever=KeywordRetriever.create(),
        generator=build_generator(),
        capacity=2,
    )
    pipeline.subscribe_evictions(lambda key, entry: print(f"  ✗ Evicted {key}"))

    try:
        await demo_hit_and_miss(pipeline)
        await demo_eviction(pipeline)
        print_metrics(pipeline.get_metrics())

        print_section("Reset")
        print_metrics(pipeline.reset())
    finally:
        close = getattr(pipeline.generator, "close", None)
        if close is not None:
            await close()


if __name__ == "__main__":
    asyncio.run(main())
