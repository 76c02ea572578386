import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src", "qr_attendance"))

from qr_attendance.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "3000")))
