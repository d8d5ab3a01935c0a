# embench

Building blocks of a small suite of embedded-style benchmark kernels: a
portable random number generator and allocator, the primitives of a stable
in-place block merge sort, and the charts of a car window lift statechart
controller.

## Installing

```
pip install .
```

Install the test extra to run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `embench.beebs`

- `Random(seed=0)`: a linear congruential generator with a fixed multiplier
  and offset. `rand()` returns the next value in the range 0 to `RAND_MAX`
  (32767); `seed(new_seed)` restarts the sequence and raises `ValueError` for
  a negative seed.
- `Heap(size)`: a bump allocator over a `bytearray` of `size` bytes (a
  multiple of `ALIGNMENT`, 8). `allocate(size)` returns an offset into
  `memory`, or `None` for zero bytes, and raises `HeapExhausted` (a
  `MemoryError`) when the block does not fit. `allocate_zeroed(count, size)`
  zero-fills the block, `reallocate(offset, size)` copies into a fresh block,
  `free(offset)` only checks the offset, since memory is never reclaimed, and
  `within_budget()` reports whether the total requested has stayed within the
  heap.
- `float_eq(expected, actual)` and `double_eq(expected, actual)` compare
  results within `VERIFY_FLOAT_EPS` (1e-5) and `VERIFY_DOUBLE_EPS` (1e-13).

```python
from embench.beebs import Heap, Random

rng = Random(0)
values = [rng.rand() for _ in range(3)]

heap = Heap(64)
offset = heap.allocate(10)   # 0; the next allocation starts at 16
```

### `embench.wikisort_tools`

The pieces of the block merge sort, all working in place on a list of
`Item(value, index)` over half-open `Range(start, end)` spans, with a
`compare` such as `item_less`:

- `floor_power_of_two(value)`
- `binary_first(array, index, span, compare)` and
  `binary_last(array, index, span, compare)`
- `insertion_sort(array, span, compare)` (stable)
- `reverse(array, span)`, `block_swap(array, start1, start2, block_size)` and
  `rotate(array, amount, span, cache, cache_size)`
- `wiki_merge(array, buffer, a, b, compare, cache, cache_size)`

```python
from embench.wikisort_tools import Item, Range, insertion_sort, item_less

items = [Item(3, 0), Item(1, 1), Item(3, 2)]
insertion_sort(items, Range(0, len(items)), item_less)
```

### `embench.statemate_state`, `embench.statemate_charts`, `embench.statemate_door`

`WindowLiftState` holds every signal, timer, flag (`bits`, indexed by `Flag`)
and chart state of the window lift controller. `reset()` clears the flags,
entry timers and chart states; `interface()` records entry times and fires
expired scheduled actions.

Each chart function advances one chart by one step and clears `stable`
whenever it takes a transition:

- `child_lock_ctrl(state)`, `pinch_protection_ctrl(state)` and
  `block_detection_ctrl(state)` in `embench.statemate_charts`
- `door_module_ctrl(state)` in `embench.statemate_door`

A chart does nothing unless its activity flag in `state.bits` is set.

## What this package does not do

There is no command-line program and no benchmark runner: nothing here
repeats a kernel a scaled number of times, warms it up or verifies a final
result. The tar-header search and the LU decomposition kernels are not
included. The sort primitives are provided, but there is no complete sort
function built from them, and there are no input-pattern generators. The
statechart functions step single charts; there is no loop that drives the
whole door unit until it settles.