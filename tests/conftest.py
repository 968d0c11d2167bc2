# tests/conftest.py
import os
import sys

# Ensure repository root is on PYTHONPATH for tests
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

# Providers stay disabled unless a test configures them explicitly
for _name in ("GEMINI_API_KEY", "OPENAI_API_KEY", "OPENAI_API_URL"):
    os.environ[_name] = ""
