from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional

from markup_tool import __version__
from markup_tool.engine import Category, InvalidQuantityError, Job, ParseError, build_pipeline
from markup_tool.config.log_setup import setup_logging

setup_logging()

app = FastAPI(
    title="Markup Tool API",
    description="Prices jobs through the markup pipeline",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Built once; each request prices its own Job
pipeline = build_pipeline()


class MarkupRequest(BaseModel):
    price: str
    headcount: int = 0
    category: Category = Category.OTHER


class TraceStepResponse(BaseModel):
    step: str
    description: str
    value: Optional[str] = None


class MarkupResponse(BaseModel):
    category: Category
    headcount: int
    price: str
    base_price: str
    marked_up_price: str
    trace: List[TraceStepResponse]


@app.get("/")
async def root():
    return {"status": "online", "message": "Markup Tool API Active"}


@app.get("/rates")
async def get_rates():
    return pipeline.rates.as_dict()


@app.post("/markup", response_model=MarkupResponse)
async def calculate_markup(req: MarkupRequest):
    try:
        job = pipeline.run(Job.create(req.price, req.headcount, req.category))
    except (ParseError, InvalidQuantityError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return MarkupResponse(
        category=job.category,
        headcount=job.headcount,
        price=str(job.original_price),
        base_price=str(job.base_price),
        marked_up_price=str(job.running_price),
        trace=[TraceStepResponse(step=t.step, description=t.description, value=t.value) for t in job.trace],
    )
