"""Template endpoints that reflect request fields into fixed response shapes."""

from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["templates"])

TROUBLESHOOTING_SUGGESTIONS = ["Check authentication", "Verify parameters", "Review logs"]
PERFORMANCE_RECOMMENDATIONS = ["Implement caching", "Add rate limiting", "Optimize queries"]


class ArchitectureRequest(BaseModel):
    gptPurpose: Optional[Any] = None
    targetUsers: Optional[Any] = None
    coreFeatures: Optional[Any] = None
    integrationNeeds: Optional[Any] = None


class SystemPromptRequest(BaseModel):
    role: Optional[Any] = None
    expertise: Optional[Any] = None
    constraints: Optional[Any] = None
    conversationStyle: Optional[Any] = None


class TroubleshootRequest(BaseModel):
    errorType: Optional[Any] = None
    context: Optional[Any] = None
    requestDetails: Optional[Any] = None


class OptimizeRequest(BaseModel):
    currentMetrics: Optional[Any] = None
    bottlenecks: Optional[Any] = None
    optimizationGoals: Optional[Any] = None


@router.post("/generateArchitecture")
async def generate_architecture(req: ArchitectureRequest):
    """Outline the components of a GPT integration."""
    return {
        "framework": {
            "systemComponents": {
                "purpose": req.gptPurpose,
                "users": req.targetUsers,
                "features": req.coreFeatures,
                "integrations": req.integrationNeeds,
            }
        }
    }


@router.post("/createSystemPrompt")
async def create_system_prompt(req: SystemPromptRequest):
    return {
        "systemPrompt": {
            "role": req.role,
            "expertise": req.expertise,
            "constraints": req.constraints,
            "style": req.conversationStyle,
        }
    }


@router.post("/troubleshootAPI")
async def troubleshoot_api(req: TroubleshootRequest):
    return {
        "troubleshooting": {
            "error": req.errorType,
            "context": req.context,
            "request": req.requestDetails,
            "suggestions": list(TROUBLESHOOTING_SUGGESTIONS),
        }
    }


@router.post("/optimizePerformance")
async def optimize_performance(req: OptimizeRequest):
    return {
        "optimization": {
            "current": req.currentMetrics,
            "bottlenecks": req.bottlenecks,
            "goals": req.optimizationGoals,
            "recommendations": list(PERFORMANCE_RECOMMENDATIONS),
        }
    }
