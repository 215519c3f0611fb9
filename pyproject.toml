[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shellparse"
version = "0.1.0"
description = "Tokenizer, variable expansion, here-documents and command parsing for a small interactive shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "parser", "lexer", "tokenizer", "heredoc", "expansion"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shellparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
