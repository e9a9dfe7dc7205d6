# sudoku_tool_api.py
# Optional FastAPI wrapper for the tool functions.
# Run with: uvicorn apps.api.sudoku_tool_api:app --reload
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from solver.config import SolverConfig
from solver.errors import SudokuInputError
from solver.sudoku_tools import sanity_check, compute_candidates_tool, solve_tool

app = FastAPI(title="Sudoku Solver Tool API")

class GridModel(BaseModel):
    grid: List[List[int]]

class PuzzleModel(BaseModel):
    puzzle: str

class SolveRequest(BaseModel):
    puzzle: str
    max_steps: Optional[int] = None
    time_limit_ms: Optional[float] = None
    hidden_singles: bool = False

class SanityRequest(BaseModel):
    original: List[List[int]]
    current: List[List[int]]

@app.post("/solve")
def api_solve(req: SolveRequest):
    try:
        cfg = SolverConfig(max_steps=req.max_steps, time_limit_ms=req.time_limit_ms,
                           hidden_singles=req.hidden_singles)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    payload = solve_tool(req.puzzle, cfg)
    if payload["status"] in ("malformed_input", "contradictory_input"):
        raise HTTPException(status_code=422, detail=payload)
    return payload

@app.post("/sanity_check")
def api_sanity(req: SanityRequest):
    try:
        return sanity_check(req.original, req.current)
    except SudokuInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

@app.post("/compute_candidates")
def api_cands(payload: PuzzleModel):
    try:
        return compute_candidates_tool(payload.puzzle)
    except SudokuInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

@app.post("/compute_candidates_grid")
def api_cands_grid(payload: GridModel):
    try:
        return compute_candidates_tool(payload.grid)
    except SudokuInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
