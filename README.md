# comanda

Building blocks for pipelines described in YAML, where each named step
takes some input, hands it to a model with an action, and writes the
result somewhere. The package provides the parts around that: step
definitions and their validation, recognising and fetching URL inputs,
scraping web pages, progress reporting, writing outputs, and the
file-management helpers of a pipeline server (bearer-token checks,
detecting pipelines that read standard input, bulk file operations,
backup and restore).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Steps (`comanda.steps`)

A pipeline is a `DSLConfig` holding an ordered list of `Step` objects,
each with a name and a `StepConfig`. The `StepConfig` fields `input`,
`model`, `action`, `output` and `next_action` hold whatever the workflow
gave: a string, a list, or a mapping; `None` means the key was absent.

`normalize_string_slice` turns any of those shapes into a list of
strings:

```python
from comanda.steps import normalize_string_slice

normalize_string_slice("report.txt")                 # ["report.txt"]
normalize_string_slice(["a.txt", "b.txt"])           # ["a.txt", "b.txt"]
normalize_string_slice("filenames: a.txt, b.txt")    # ["a.txt", "b.txt"]
normalize_string_slice({"filename": "a.txt"})        # ["a.txt"]
normalize_string_slice(["a.txt", 42])                # ["a.txt", ""]
normalize_string_slice(None)                         # []
```

Lists keep their length: list items that are neither strings nor
mappings with a `filename` key become `""`.

`validate_step_config(step_name, config)` raises `StepValidationError`
(a `ValueError`) listing everything that is missing: the `input` tag
must be present (it may be empty or `NA`), and `model`, `action` and
`output` must each name at least one value. The error keeps the step
name and the list of messages in `step_name` and `errors`.

`parse_variable_assignment("STDIN as $name")` returns
`("STDIN", "name")`; text without exactly one ` as $` comes back
unchanged with an empty name. `substitute_variables(text, variables)`
replaces every `$name` in the text with the variable's value.

## URL inputs (`comanda.fetching`)

- `is_url(text)` is true for strings with both a scheme and a host.
- `contains_glob_char(path)` is true for paths containing `*`, `?`,
  `[` or `]`.
- `fetch_url(url)` downloads an `http` or `https` URL into a temporary
  file whose extension follows the response's `Content-Type` (`.html`,
  `.json`, otherwise `.txt`) and returns its path; the caller removes
  the file. Hosts other than `localhost` and `127.0.0.1` are resolved
  first, with a five-second limit. An invalid URL, an unresolvable
  host, a timeout, a request failure or a status other than 200 raises
  `FetchError`.

## Scraping (`comanda.scraper`)

`Scraper().scrape(url)` fetches a page and returns a `ScrapedData` with
the URL, status code and content type and, for HTML responses, the
page title, the non-empty paragraph texts and the non-empty link
targets. A status of 203 or above, or a failed request, raises
`ScrapeError`.

`allow_domains(*domains)` restricts requests to those domains and their
subdomains, as checked by `is_allowed(host)`; with no domains set, all
hosts are allowed. A URL on a disallowed host is not requested and an
empty `ScrapedData` comes back. `set_custom_headers(headers)` adds
headers to every request.

## Outputs (`comanda.output`)

`write_outputs(model_name, response, outputs)` prints
`Response from <model>:` followed by the response for every `STDOUT`
entry, and writes the response to every other entry as a file, creating
parent directories as needed and overwriting existing files.

## Progress (`comanda.progress`)

Each `ProgressUpdate` has a `ProgressType` (`SPINNER`, `STEP`,
`COMPLETE`, `ERROR`), a message, an optional error and an optional
`StepInfo` (name, model, action). A `ProgressWriter` receives updates
through `write_progress`; `QueueProgressWriter` puts them on a
`queue.Queue`.

`Spinner` shows `<message>... |` with a turning indicator in a
background thread between `start(message)` and `stop()`, then prints
`<message>... Done!`. When given a progress writer it also sends a
`STEP` update on start and on completion. `disable()` stops it from
doing anything further. The output stream and the animation interval
can be passed to the constructor.

## Server helpers

`comanda.auth.check_authorization(enabled, bearer_token, header)` does
nothing when authentication is disabled, and otherwise raises
`AuthError` (with `message` and an HTTP 401 `status`) unless the header
is exactly `Bearer <token>` with the configured token:

```python
from comanda.auth import check_authorization, has_stdin_input

check_authorization(True, "token", "Bearer token")

has_stdin_input(b"step:\n  input: STDIN\n  model: gpt-4\n")   # True
```

`has_stdin_input(content)` reports whether any step of a YAML pipeline
reads from `STDIN`: case-insensitively, including `STDIN as $var` and
`STDIN` among a list of inputs. When the text is not valid YAML or not
a mapping of steps, it falls back to scanning for `input: stdin` lines.
`contains_stdin(text)` makes the check for a single input value.

`comanda.files.FileStore(data_dir)` manages files under a data
directory. `validate_path(path)` returns the full path and raises
`PathAccessError` for empty or absolute paths, paths with a `..`
component, and paths that resolve outside the directory.
`bulk_create` and `bulk_update` take `(path, content)` pairs and
`bulk_delete` takes paths; each works file by file and returns a
`BulkFileResponse` whose `FileResult` entries say which files succeeded
and why the others did not (`Invalid file path: access denied`,
`File already exists`, `File not found`, ...).

`comanda.backup.create_backup(store)` zips the data directory, leaving
out its `backups` folder, into `backups/backup-YYYYMMDD-HHMMSS.zip` and
returns the archive's name. `restore_backup(store, name)` extracts a
named backup into the data directory and raises `RestoreError`, with a
message and an HTTP `status`, for an empty or unsafe name (400), a
missing archive (404), an entry that would land outside the data
directory (403), or a failure to read or write (500).

## What the package does not do

It does not run pipelines: there is no step executor, no model
providers and no calls to any model, and no reading of workflow files
beyond `has_stdin_input`. It has no database inputs or outputs, no
command-line program, and no HTTP server; the server helpers return
values or raise exceptions, and serving them over HTTP is left to the
caller.