# quantnet

Building blocks for fixed-point quantized neural-network arithmetic in Python,
plus tools for matching face embeddings. Values are stored as integers
together with an exponent: the real value of an element is
`element * 2**exponent`.

## Modules

- `quantnet.fastmath` – cheap scalar approximations: `power`, `sqrt_quick`,
  `sqrt_reciprocal_quick`, `sqrt_newton`, `root_newton`, `atan`, `atan2`,
  `acos`, `asin` and `exp_fast` (`(1 + x / 2**steps) ** (2**steps)`).
- `quantnet.tool` – `truncate` (saturate a scalar or array to an integer
  type), `calculate_exponent`, `format_vector` / `print_vector`, and the
  `Latency` timer, which measures microseconds and averages the last `size`
  runs.
- `quantnet.tensor` – `Tensor`, a numpy array with an exponent and a shape
  (`reshape`, `expand_dims`, `flatten`, `allocate`, `release`, `copy_from`,
  `format_shape`), and `Layer`, the named base class of layers.
- `quantnet.elementwise` – `leakyrelu` and `min2d`, each returning a new
  tensor or, with `inplace=True`, writing into the input.
- `quantnet.padding` – `pad` with `PaddingMode` (`CONSTANT`, `EMPTY`,
  `EDGE`, `REFLECT`, `SYMMETRIC`) and `expand_paddings`, which turns one,
  two or two-per-dimension values into a before/after list.
- `quantnet.fully_connected` – `fully_connected`, a quantized matrix product
  with optional bias and activation callable, requantized to a chosen
  output exponent.
- `quantnet.concat2d` – `Concat2D`, a layer that concatenates tensors along
  the channel (last) axis. Its output owns one block of storage and each
  input receives a view of its own channel range, so filling the inputs
  fills the output.
- `quantnet.face_tool` – `FaceInfo`, `FaceID`, `l2_norm`, `cos_distance`
  and `transform_mfn_output` (dequantize an embedding to float32, optionally
  normalized).
- `quantnet.face_recognizer` – `FaceRecognizer`, an in-memory store of
  enrolled embeddings matched by cosine similarity.

## Installation

```
pip install .
```

Run the tests with:

```
pip install .[test]
pytest
```

## Examples

Element-wise operators:

```python
import numpy as np
from quantnet.tensor import Tensor
from quantnet.elementwise import leakyrelu, min2d

x = Tensor(np.array([[-8, 4]], dtype=np.int16), exponent=0, shape=[1, 2])
y = leakyrelu(x, activation_alpha=1, activation_exponent=-2)
# y.element == [[-2, 4]]

z = min2d(x, y)
```

Concatenation sharing storage with its inputs:

```python
from quantnet.concat2d import Concat2D
from quantnet.tensor import Tensor

a = Tensor(shape=[2, 2, 3])
b = Tensor(shape=[2, 2, 5])
concat = Concat2D("concat")
concat.build([a, b])        # output shape [2, 2, 8]
concat.calloc_element()     # a and b now view slices of the output
a.element[...] = 1
print(concat.output.element[..., :3])
```

Enrolling and recognizing face embeddings:

```python
import numpy as np
from quantnet.tensor import Tensor
from quantnet.face_tool import l2_norm
from quantnet.face_recognizer import FaceRecognizer

recognizer = FaceRecognizer(thresh=0.55)
alice = l2_norm(Tensor(np.array([1.0, 2.0, 3.0], dtype=np.float32)))
recognizer.enroll_id(alice, name="alice")

probe = l2_norm(Tensor(np.array([1.0, 2.1, 2.9], dtype=np.float32)))
info = recognizer.recognize(probe)
print(info.id, info.name, info.similarity)
```

`recognize` returns id `-1` when no enrolled identity scores above the
threshold. `delete_id`, `clear_id`, `set_ids`, `enrolled_ids`,
`enrolled_ids_with_name`, `enrolled_id_num` and `get_face_emb` manage the
enrolled set.

## What it does not do

- The only layer class is `Concat2D`; activations, reshaping and pooling
  are available only as the functions listed above, not as layers.
- There is no model: nothing here turns an image into an embedding, and
  there is no face alignment or image preprocessing. The face tools work on
  embeddings you supply.
- Enrolled identities live in memory only; `FaceRecognizer` has no
  persistent storage.
- There is no command-line program.