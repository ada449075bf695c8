[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sercore"
version = "0.1.0"
description = "Small service building blocks: logging, timers, tables, domain tries, TLV codec and a multi-line de-duplicator"
requires-python = ">=3.10"
dependencies = []
keywords = ["timer-wheel", "trie", "tlv", "thread-pool", "logging", "ring-buffer", "hash-table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
muniq = "sercore.muniq:main"

[tool.hatch.build.targets.wheel]
packages = ["sercore"]

[tool.pytest.ini_options]
addopts = "-ra"
