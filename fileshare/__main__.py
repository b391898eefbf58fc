import os

import uvicorn

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    print(f"[Server] Running at http://{host}:{port}")
    uvicorn.run("fileshare.main:app", host=host, port=port, log_level="warning")
