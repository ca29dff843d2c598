from fastapi import FastAPI
from lunarcal.api.public import router as public_router

app = FastAPI(title="lunarcal public api")
app.include_router(public_router)
