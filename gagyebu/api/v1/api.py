from fastapi import APIRouter

from gagyebu.api.v1.routes import auth, categories, fixed_expenses, holidays, payment_methods, transactions, views

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(categories.router)
api_router.include_router(payment_methods.router)
api_router.include_router(transactions.router)
api_router.include_router(fixed_expenses.router)
api_router.include_router(views.router)
api_router.include_router(holidays.router)
