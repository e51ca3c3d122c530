"""Splitting sample indices between partitions, such as distributed workers."""

from __future__ import annotations

from typing import List


def partition_by_round_robin(
    num_samples: int, partition_id: int, num_partitions: int, batch_size: int = 1
) -> List[int]:
    """Return the sample indices for ``partition_id``, dealt round-robin in batches.

    Samples are dealt in global batches of ``num_partitions * batch_size``.
    A trailing incomplete global batch is only kept if it can give at least
    one sample to every partition; it is then shared out as evenly as
    possible, earlier partitions taking one extra sample each.
    """
    if not 0 <= partition_id < num_partitions:
        raise ValueError("invalid partition_id, num_partitions for partition_by_round_robin")
    per_global_batch = num_partitions * batch_size
    num_global_batches, tail = divmod(num_samples, per_global_batch)
    include_last = tail >= num_partitions
    if include_last:
        num_global_batches += 1

    samples: List[int] = []
    for batch in range(num_global_batches):
        offset = batch * per_global_batch
        if include_last and batch == num_global_batches - 1:
            count, remaining = divmod(num_samples - offset, num_partitions)
            offset += count * partition_id + min(partition_id, remaining)
            if partition_id < remaining:
                count += 1
        else:
            offset += batch_size * partition_id
            count = batch_size
        samples.extend(range(offset, offset + count))
    return samples