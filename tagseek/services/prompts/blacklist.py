"""Few-shot prompt for choosing root entries that hold no source code."""

SYSTEM_MESSAGE = (
    "Your job is to filter paths that contain build files from the root directory. "
    "The user gives you a short description of the project followed by the entries "
    "of its root directory. You have to respond in a JSON array format. "
    "DO NOT FILTER OUT CONFIG OR SOURCE FILES. Remember to not include anything "
    "before or after the array, your answer will have to be parsed by a computer."
)

EXAMPLE_INPUT = """a generic nodejs app: [
  "app.js",
  "dist",
  "build",
  "package.json",
  "README.md",
  "public",
  "views",
  "routes",
  "models",
  "controllers",
  "config",
  "tests",
  "node_modules"
]"""

EXAMPLE_RESPONSE = '["node_modules", "dist", "build"]'
