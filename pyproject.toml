[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labtools"
version = "0.1.0"
description = "Small Unix-style text tools, a toy shell parser and socket exercises: echo servers, rock-paper-scissors and chunked UDP transfer"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "grep",
    "wc",
    "shell",
    "parser",
    "sockets",
    "tcp",
    "udp",
    "networking",
    "rock-paper-scissors",
    "reliable-transfer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Text Processing :: Filters",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lab-grep = "labtools.grep:main"
lab-wc = "labtools.wc:main"
lab-cat = "labtools.simple:cat_main"
lab-echo = "labtools.simple:echo_main"
lab-ln = "labtools.fileutils:ln_main"
lab-mkdir = "labtools.fileutils:mkdir_main"
lab-rm = "labtools.fileutils:rm_main"
lab-kill = "labtools.fileutils:kill_main"
lab-basic = "labtools.basic:main"
lab-rps-server = "labtools.rps:main"
lab-rps-client = "labtools.rps_client:main"
lab-chunk-client = "labtools.reliable:client_main"
lab-chunk-server = "labtools.reliable:server_main"

[tool.hatch.build.targets.wheel]
packages = ["labtools"]

[tool.hatch.build.targets.sdist]
include = ["labtools", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
