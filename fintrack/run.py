"""Start the FastAPI server"""
import uvicorn

from fintrack.config import API_HOST, API_PORT


def main():
    uvicorn.run(
        "fintrack.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )


if __name__ == "__main__":
    main()
