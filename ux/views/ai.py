# ux/views/ai.py

import logging

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import AIRecommendation
from core.serializers import AIRecommendationSerializer

logger = logging.getLogger("ovento.recommendations")


class UXRecommendationsView(APIView):
    """
    GET /api/ai/recommendations/?type=event|team
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        rec_type = request.query_params.get("type") or None
        if rec_type not in (None, AIRecommendation.TYPE_EVENT, AIRecommendation.TYPE_TEAM):
            rec_type = None

        recommendations = request.storage.get_user_recommendations(request.user.id, rec_type)
        return Response({
            "meta": {"success": True},
            "data": {"recommendations": AIRecommendationSerializer(recommendations, many=True).data},
        })


class UXGenerateRecommendationsView(APIView):
    """
    POST /api/ai/generate-recommendations/

    Rescores every event and open team for the caller.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        recommendations = request.storage.generate_recommendations(request.user.id)
        logger.info(f"Generated {len(recommendations)} recommendations for user={request.user.id}")
        return Response({
            "meta": {"success": True},
            "data": {
                "count": len(recommendations),
                "recommendations": AIRecommendationSerializer(recommendations, many=True).data,
            },
        })
