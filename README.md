# flashkit

Building blocks for machine-learning training loops, built on NumPy arrays.

## What is in it

**Datasets** (`flashkit.dataset`): composable views over samples. A sample is a list of arrays; every dataset supports `len()`, `get(idx)`, indexing and iteration.

- `tensor_dataset.TensorDataset` slices arrays along their last non-singleton axis.
- `batch_dataset.BatchDataset` packs consecutive samples into batches. `BatchDatasetPolicy` controls the trailing samples:
  - `INCLUDE_LAST` packs them into a smaller last batch.
  - `SKIP_LAST` drops them.
  - `DIVISIBLE_ONLY` rejects a dataset whose size is not divisible by the batch size.
- `concat_dataset.ConcatDataset` chains datasets one after another.
- `merge_dataset.MergeDataset` joins the fields of several datasets index by index.
- `resample_dataset.ResampleDataset` remaps indices with a sequence or a function.
- `shuffle_dataset.ShuffleDataset` permutes indices with a seeded generator; call `resample()` to draw a new order and `set_seed()` to reseed.
- `transform_dataset.TransformDataset` applies a function to each field.
- `blob_dataset.BlobDataset` is an abstract dataset that keeps all arrays and an index in one binary blob. Arrays may have at most four dimensions.
- `file_blob_dataset.FileBlobDataset` is a `BlobDataset` stored in a file. Add samples with `add()` or `add_blob()`, then call `write_index()` before reopening the file.
- `prefetch_dataset.PrefetchDataset` loads upcoming samples on background threads and is meant for sequential access. Call `close()` when done.
- `partition.partition_by_round_robin` splits sample indices between partitions, for example between workers.

**Meters** (`flashkit.meter`): running statistics.

- `AverageValueMeter` reports mean, unbiased variance and count.
- `CountMeter` keeps a total per category.
- `EditDistanceMeter` reports error, deletion, insertion and substitution rates in percent, using `levenshtein_distance`.
- `FrameErrorMeter` reports the element mismatch percentage, or accuracy.
- `MSEMeter` tracks mean squared error.
- `TimeMeter` is a wall-clock timer, optionally reporting time per unit.

**Common helpers** (`flashkit.common`):

- `utils.all_close` compares arrays for dtype, shape and tolerance.
- `threadpool.ThreadPool` is a fixed-size worker pool returning futures; it can be used as a context manager.
- `serialization` provides:
  - `dumps`, `loads`, `save` and `load` for a binary format covering plain Python values and NumPy arrays;
  - `versioned`, `serialize_as`, `save_fields` and `load_fields` for declaring versioned object fields.
- `defines` holds shared enumerations such as `ReduceMode`, `PoolingMode`, `RnnMode`, `DistributedBackend` and `DistributedInit`, and `DistributedConstants`.

**Distributed helpers** (`flashkit.distributed`):

- `filestore.FileStore` is a key/value rendezvous store on a shared directory. `get` waits until the key is set or the timeout expires.
- `lru_cache.LRUCache` is a bounded least-recently-used cache, and `make_hash_key` builds cache keys.

## What it does not do

There is no collective communication. The package has no all-reduce, no gradient reducers and no process-group setup, so `DistributedBackend` and `DistributedInit` are plain enumerations. It has no GPU or device handling, and it has no command-line program.

## Installation

```
pip install flashkit
```

For running the tests:

```
pip install "flashkit[test]"
pytest
```

## Example

```python
import numpy as np
from flashkit.dataset.tensor_dataset import TensorDataset
from flashkit.dataset.batch_dataset import BatchDataset, BatchDatasetPolicy
from flashkit.meter.average_value_meter import AverageValueMeter

tensor = np.random.rand(5, 4, 42)
ds = TensorDataset([tensor])          # 42 samples of shape (5, 4, 1)

batches = BatchDataset(ds, 10, BatchDatasetPolicy.INCLUDE_LAST)
print(len(batches))                   # 5
print(batches.get(4)[0].shape)        # (5, 4, 2): the remaining 2 samples

meter = AverageValueMeter()
for sample in ds:
    meter.add_array(sample[0])
mean, variance, count = meter.value()
```

Edit distance between sequences:

```python
from flashkit.meter.edit_distance_meter import EditDistanceMeter

meter = EditDistanceMeter()
meter.add([1, 2, 3], [1, 3, 3])
print(meter.value()[0])  # error rate in percent: one substitution in three
```