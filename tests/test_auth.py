import pytest

from comanda.auth import AuthError, check_authorization, contains_stdin, has_stdin_input

CASES = [
    (
        "direct stdin input",
        """analyze_text:
  input: STDIN
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        True,
    ),
    (
        "array with stdin first",
        """analyze_text:
  input: 
    - STDIN
    - file.txt
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        True,
    ),
    (
        "array with stdin not first",
        """analyze_text:
  input: 
    - file.txt
    - STDIN
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        True,
    ),
    (
        "no stdin input",
        """analyze_text:
  input: file.txt
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        False,
    ),
    (
        "map input type",
        """analyze_text:
  input:
    database:
      type: postgres
      query: "SELECT * FROM users"
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        False,
    ),
    (
        "multiple steps with stdin in first step",
        """step1:
  input: STDIN
  model: gpt-4
  action: "first action"
  output: STDOUT
step2:
  input: file.txt
  model: gpt-4
  action: "second action"
  output: STDOUT""",
        True,
    ),
    (
        "multiple steps with stdin in later step",
        """step1:
  input: file.txt
  model: gpt-4
  action: "first action"
  output: STDOUT
step2:
  input: STDIN
  model: gpt-4
  action: "second action"
  output: STDOUT""",
        True,
    ),
    (
        "case insensitive stdin",
        """analyze_text:
  input: stdin
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        True,
    ),
    (
        "stdin with variable assignment",
        """analyze_text:
  input: "STDIN as $var"
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        True,
    ),
    (
        "complex yaml with multi-line action",
        """analyze_text:
  input: STDIN
  model: gpt-4
  action: |
    As a code review expert, analyze the following code and provide:
    1) Potential security vulnerabilities
    2) Performance optimization opportunities
    3) Code quality improvements
    4) A risk assessment score from 0-100
    
    Here is the code to analyze:
  output: STDOUT""",
        True,
    ),
    (
        "exact match of production yaml",
        """analyze_text:
  input: STDIN  # This makes the YAML eligible for POST requests
  model: gpt-4o
  action: "As a cybersecurity IAM expert, assess the following role and service account assignments and provide the following: 1) an overview of any risks associated with the current settings 2) anything which stands out as non standard or unusual 3) an overall risk rating score out of 100. Here are the roles in JSON format:"
  output: STDOUT""",
        True,
    ),
    (
        "yaml with comments before input",
        """# This is a test YAML file
# It uses STDIN for input
analyze_text:
  input: STDIN  # This makes it POST-only
  model: gpt-4
  action: "analyze this"
  output: STDOUT""",
        True,
    ),
    (
        "yaml with unusual formatting",
        """
# Unusual formatting test
analyze_text:
    input:    STDIN   # Lots of spaces
    model:    gpt-4
    action:   "test"
    output:   STDOUT""",
        True,
    ),
    (
        "yaml with special characters in comments",
        """analyze_text:
  input: STDIN  # Special chars: @#$%^&*()
  model: gpt-4  # More special chars: !@#$
  action: "test"
  output: STDOUT""",
        True,
    ),
]


@pytest.mark.parametrize(
    "yaml_text, expected", [(c[1], c[2]) for c in CASES], ids=[c[0] for c in CASES]
)
def test_has_stdin_input(yaml_text, expected):
    assert has_stdin_input(yaml_text) is expected


def test_has_stdin_input_accepts_bytes():
    assert has_stdin_input(CASES[0][1].encode()) is True


def test_has_stdin_input_falls_back_on_invalid_yaml():
    broken = "step:\n  input: STDIN\n  action: [unclosed\n"
    assert has_stdin_input(broken) is True


def test_has_stdin_input_fallback_without_stdin():
    broken = "step:\n  input: file.txt\n  action: [unclosed\n"
    assert has_stdin_input(broken) is False


def test_has_stdin_input_empty_document():
    assert has_stdin_input("") is False


@pytest.mark.parametrize(
    "text, expected",
    [
        ("STDIN", True),
        ("  stdin  ", True),
        ("STDIN as $data", True),
        ("file.txt", False),
        ("STDIN.txt", False),
    ],
)
def test_contains_stdin(text, expected):
    assert contains_stdin(text) is expected


def test_check_authorization_disabled_accepts_anything():
    assert check_authorization(False, "token", None) is None


def test_check_authorization_valid_token():
    assert check_authorization(True, "token", "Bearer token") is None


@pytest.mark.parametrize(
    "header, message",
    [
        (None, "Authorization header required"),
        ("", "Authorization header required"),
        ("token", "Invalid authorization header format"),
        ("Basic token", "Invalid authorization header format"),
        ("Bearer token extra", "Invalid authorization header format"),
        ("Bearer secret", "Invalid bearer token"),
    ],
)
def test_check_authorization_failures(header, message):
    with pytest.raises(AuthError) as info:
        check_authorization(True, "token", header)
    assert info.value.message == message
    assert info.value.status == 401