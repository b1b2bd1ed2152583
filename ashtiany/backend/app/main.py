from .entrypoints.fastapi_app import create_app

# uvicorn app.main:app
app = create_app()
