"""Minimal Pydantic models for the Stripe Checkout Sessions API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StripeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CheckoutSession(StripeBaseModel):
    id: str
    url: str | None = None
    status: str | None = None


class StripeErrorDetail(StripeBaseModel):
    message: str | None = None
    type: str | None = None
    code: str | None = None


class StripeErrorResponse(StripeBaseModel):
    error: StripeErrorDetail
