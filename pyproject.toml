[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "newsboard"
version = "0.1.0"
description = "A small newsgroup server and interactive client speaking a compact binary protocol over TCP"
requires-python = ">=3.10"
dependencies = []
keywords = ["news", "newsgroups", "articles", "client-server", "tcp", "protocol"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Usenet News",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
news-server = "newsboard.news_server:main"
news-client = "newsboard.news_client:main"

[tool.hatch.build.targets.wheel]
packages = ["newsboard"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
