# critscore

`critscore` computes a criticality score for a project from a set of numeric
signals. Each signal is normalised and may be clamped to bounds. The signals
are then combined by a scoring algorithm that a YAML configuration describes.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Scoring configuration

A configuration names an algorithm and lists its inputs. The only algorithm
registered is `weighted_arithmetic_mean`.

```yaml
algorithm: weighted_arithmetic_mean
inputs:
  - field: legacy.created_since
    weight: 1
    bounds:
      upper: 120
    distribution: zipfian
  - field: legacy.updated_since
    weight: 1
    bounds:
      upper: 120
      smaller_is_better: yes
    distribution: zipfian
  - field: legacy.issue_comment_frequency
    weight: 1
    condition:
      not:
        field_exists: legacy.archived
```

Each input accepts these keys:

- `field` names the signal. It is required.
- `weight` must be greater than 0. It defaults to `1`.
- `distribution` is `linear` or `zipfian` (`log(1 + v)`). It defaults to
  `linear`.
- `bounds` holds `lower` and `upper`, which default to 0, and
  `smaller_is_better`. A value is clamped to the bounds and shifted so that it
  starts at 0. With `smaller_is_better` it is then inverted. The result is
  divided by the normalised width of the bounds.
- `condition` is either `field_exists: <name>` or `not: <condition>`. Exactly
  one of the two must be set. The input counts only when the condition holds.
- `tags` is an optional list of labels.

An invalid configuration raises `critscore.scoring.config.ConfigError`, which
is a subclass of `ValueError`.

The weighted arithmetic mean averages the values of the inputs that are
present in a record, weighted by their weights. It returns NaN when no input
is present.

## Scoring a record

```python
from critscore.scoring.scorer import from_config, name_from_filepath

path = "my_config.yml"
with open(path) as stream:
    scorer = from_config(name_from_filepath(path), stream)

print(scorer.name)  # "my_config_score"
print(scorer.score_raw({"legacy.created_since": "48", "legacy.updated_since": "3"}))
```

- `name_from_filepath` takes the base name of the file and drops its
  extension. It replaces every non-alphanumeric character with `_`, lowercases
  the letters and appends `_score`.
- `Scorer.score_raw` takes string values and skips any value that does not
  parse as a number.
- `Scorer.score_record` takes a mapping and uses only its integer and float
  values.

The configuration can also be built in code. Use
`critscore.scoring.config.Config.from_dict`, `load_config` or
`InputConfig.to_algorithm_input`. Alternatively, assemble
`critscore.algorithm.input.Input` objects directly and pass them to
`critscore.algorithm.wam.new`.

## Building blocks

- `critscore.algorithm.distribution` provides `lookup_distribution(name)`,
  which returns a `Distribution` for `linear` or `zipfian`, or `None`.
- `critscore.algorithm.value` provides `Field`, `ConditionalValue`,
  `exists_condition` and `not_condition`.
- `critscore.algorithm.input` provides `Bounds` and `Input`.
- `critscore.algorithm.registry` provides the `Algorithm` base class and a
  `Registry` of algorithm factories by name.
- `critscore.algorithm.wam` provides `WeightedArithmeticMean`.
- `critscore.iterators` provides `lines(stream)`, which yields the lines of a
  text or binary stream without line terminators. It also provides
  `batch(source, size)`, which groups an iterable into lists of at most `size`
  items. Both can be closed and used as context managers.
- `critscore.workerpool.worker_pool(n, worker)` starts `n` threads. Each
  thread calls `worker(index)`. It returns a function that waits for all of
  them and re-raises the first exception a worker raised.
- `critscore.retry` repeats a request:
  - `Request` issues a request through any client callable. It stops on a 2xx
    or 3xx response, on an error, or once the attempts exceed `max_retries`.
  - `RetryingTransport.send` drives a `Request` until it is done.
  - `Options` sets the maximum number of retries, the initial delay and the
    backoff function.
  - `Options` also takes a `retry_after` function that maps a response to a
    delay, and a list of strategy functions that return a `RetryStrategy`.
- `critscore.outfile.Opener` defines output flags on an `argparse` parser:
  the file flag, the force flag and the append flag. After
  `configure(namespace)`, `open()` returns a `NamedWriter` for one of these:
  - standard output, when no file is given;
  - a new file, raising `FileExistsError` if the file exists;
  - a truncated file, with the force flag;
  - a file opened for appending, with the append flag.

  `define_flags` and `open_output` do the same through a shared default
  opener.
- `critscore.logsetup` provides `Env`, `lookup_env` and `parse_env`. It also
  provides `new_logger(env, level)`, which builds a standard-library logger
  for the `dev` environment (readable text) or the `gcp` environment (one JSON
  object per line). `new_logger_from_config_map` builds one from the
  `log-env` and `log-level` keys of a mapping.

## What it does not do

- The package has no command-line program.
- It does not gather signals from repositories or any other source. The
  records you score must be supplied by you.
- It has no writers for CSV, JSON or text reports of signals.
- The only URL destination `critscore.outfile` accepts is the in-memory
  `mem://bucket/key` store, which needs the force flag and not the append
  flag. Other URL schemes raise `ValueError`.