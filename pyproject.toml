[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gcmcipher"
version = "0.1.0"
description = "AES-GCM authenticated encryption with a pure-Python GHASH and support for arbitrary nonce sizes"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["aes", "gcm", "aead", "ghash", "authenticated-encryption", "cryptography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gcmcipher"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
