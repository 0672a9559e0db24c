import os

from dotenv import load_dotenv

load_dotenv()

from haven import create_app

app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 3000))
    app.logger.info(f"English Haven running on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port)
