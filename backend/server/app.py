"""FastAPI server for job_deck."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from job_deck.logging_config import configure_logging
from server.routes import router

app = FastAPI(title="job_deck")

# CORS for dev (Vite runs on different port)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def health_check():
    """Health check endpoint."""
    return {"ok": True, "message": "Job Deck API is running"}


def main():
    import uvicorn
    configure_logging()
    uvicorn.run("server.app:app", host="127.0.0.1", port=4000)


if __name__ == "__main__":
    main()
