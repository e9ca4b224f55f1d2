# kelplsp

Building blocks for a language server for the Kelp datapack language. The
package turns parser output (parse errors, validation errors, semantic tokens,
suggestions and signatures) into the JSON-ready shapes the Language Server
Protocol expects.

## Installation

```
pip install .
```

## Modules

### `kelplsp.messages`

- `ExpectationKind` lists what a parser can expect: a literal, a custom
  description, a single character, a digit, an identifier, whitespace,
  whitespace containing a newline, start of file or end of file.
- `Expectation` holds one expectation. Literal, custom and char expectations
  carry a value (`Expectation.literal("fn")`, `Expectation.custom(...)`,
  `Expectation.char(";")`); the others take none. `describe()` gives the
  wording used in messages: literals in double quotes, characters in single
  quotes, custom text as is.
- `ParseError` holds the span (`start`, `end`), explicit `messages` and the
  list of `expected` expectations.
- `format_expected(items)` joins items into a phrase: `expected a`,
  `expected a or b`, `expected a, b, or c`; an empty list gives `""`.
- `generate_message_error(error)` uses the error's messages if it has any,
  otherwise the descriptions of its expectations, for example
  `expected "fn", ';', or identifier`.

### `kelplsp.line_index`

- `Position` is a zero-based line and UTF-16 column.
- `LineIndex(text)` records where each line starts.
  `offset_to_position(offset, text)` turns a character offset (clamped to the
  end of the text) into a `Position`; `position_to_offset(position, text)`
  does the reverse, returning the end of the text for a line past the last
  one and `None` for a column that does not fall on a character boundary of
  its line. Negative values raise `ValueError`.
- `normalize_line_endings(text)` turns `\r\n` and `\r` into `\n`.

### `kelplsp.features`

- `SemanticTokenKind`, `ParserSemanticToken`, `semantic_token_kind_to_type_index`
  and `process_semantic_tokens(text, line_index, parser_tokens)`: sort tokens
  by start and produce `LspSemanticToken` values in the protocol's relative
  encoding (`encode()` gives the five integers).
- `build_diagnostics(text, line_index, error, validation_errors)`: an error
  diagnostic for a failed parse (when `error` is not `None`) followed by one
  for each `ValidationError`, all with source `kelp-lsp`.
- `completion_items(state, suggestions)`: keyword completion items for literal
  and character `Suggestion`s, with snippet insert text for brackets and
  quotes (`(` becomes `($0)`); `None` when there are none.
- `signature_help(signatures)`: signature help for `Signature` values; the
  active parameter defaults to the number of parameters; `None` when empty.
- `server_capabilities()`: semantic tokens (full and range), completion with
  its trigger characters, signature help, and full text sync.
- `DocumentState` and `DocumentStore`: `update(uri, text)` stores a document
  with normalised line endings, `get(uri)` returns it or `None`, and
  `semantic_range(uri, start, end)` converts a position range to offsets
  (`None` if either end is invalid, `KeyError` for an unknown document).

## Example

```python
from kelplsp.line_index import LineIndex, Position

text = "score x = 1;\nscore y = 2;\n"
index = LineIndex(text)
index.offset_to_position(14, text)              # Position(line=1, character=1)
index.position_to_offset(Position(1, 1), text)  # 14
```

## What it does not do

The package has no Kelp parser and no server: it does not read or write
protocol messages over standard input and output, and provides no command to
run. Parse results must come from elsewhere; the functions above only shape
them into protocol responses.

## Tests

```
pip install .[test]
pytest
```