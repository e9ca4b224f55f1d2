[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kelplsp"
version = "0.1.0"
description = "Language-server building blocks for the Kelp datapack language: diagnostics, semantic tokens, completion and signature help"
requires-python = ">=3.10"
dependencies = []
keywords = ["kelp", "lsp", "language-server", "minecraft", "datapack"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kelplsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
