"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class HealthRatesSchema(Schema):
    status = fields.String(required=True)
    fetched_at = fields.String(allow_none=True, data_key="fetchedAt")
    age_seconds = fields.Float(allow_none=True, data_key="ageSeconds")
    ttl_seconds = fields.Float(required=True, data_key="ttlSeconds")


class BocRateSchema(Schema):
    rate = fields.Float(required=True)
    currency = fields.String(required=True)
    currency_name = fields.String(required=True, data_key="currencyName")
    rate_type = fields.String(required=True, data_key="rateType")
    cached = fields.Boolean(required=True)
    cache_time = fields.String(required=True, data_key="cacheTime")


class ResolvedRateSchema(Schema):
    currency = fields.String(required=True)
    rate = fields.Float(required=True)
    source = fields.String(required=True)
    primary_attempt_failed = fields.Boolean(required=True, data_key="primaryAttemptFailed")
    rate_type = fields.String(allow_none=True, data_key="rateType")
    provider = fields.String(allow_none=True)
    gbp_rate = fields.Float(allow_none=True, data_key="gbpRate")
    notice = fields.String(required=True)


class QuoteQuerySchema(Schema):
    amount = fields.Float(required=True)


class TierQuoteSchema(Schema):
    tier = fields.Integer(required=True)
    multiplier = fields.Float(required=True)
    flat_fee = fields.Float(required=True, data_key="flatFee")
    total = fields.Float(required=True)
    difference = fields.Float(required=True)
    profit = fields.Float(required=True)
    highlighted = fields.Boolean(required=True)


class GbpQuoteSchema(Schema):
    rate = fields.Float(required=True)
    amount = fields.Float(required=True)
    suggested = fields.Float(required=True)


class FeeQuoteSchema(Schema):
    amount = fields.Float(required=True)
    currency = fields.String(required=True)
    rate = fields.Float(required=True)
    base_amount = fields.Float(required=True, data_key="baseAmount")
    tiers = fields.List(fields.Nested(TierQuoteSchema), required=True)
    gbp = fields.Nested(GbpQuoteSchema, allow_none=True)


class QuoteResponseSchema(Schema):
    rate = fields.Nested(ResolvedRateSchema, required=True)
    quote = fields.Nested(FeeQuoteSchema, required=True)


class ErrorMessageSchema(Schema):
    error = fields.String(required=True)
    gbp_rate = fields.Float(allow_none=True, data_key="gbpRate")
