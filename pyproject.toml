[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bancosim"
version = "0.1.0"
description = "A small terminal bank: accounts kept in a text file, user sessions, account creation and a transaction monitor."
requires-python = ">=3.10"
dependencies = []
keywords = ["bank", "accounts", "simulation", "transactions", "monitor", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Natural Language :: Spanish",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bancosim = "bancosim.bank:main"
bancosim-user = "bancosim.user_session:main"
bancosim-create-user = "bancosim.create_user:main"
bancosim-monitor = "bancosim.monitor:main"

[tool.hatch.build.targets.wheel]
packages = ["bancosim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
