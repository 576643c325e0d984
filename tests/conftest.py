import os
import tempfile

# Keep logs out of the real user folder and let Qt run without a display. Both must be set before cdt or
# PySide6 is first imported.
os.environ.setdefault("CDT_HOME", tempfile.mkdtemp(prefix="cdt-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
