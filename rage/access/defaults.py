"""The analytics backend's role/permission table.

Roles: student, teacher, teachingassistant and developer. The anonymous
routes are the ones the game tracker uses to send traces to the
collector, plus the public LTI key and environment lookups.
"""

from rage.access.models import AccessTable

DEFAULT_ACCESS_TABLE = AccessTable.model_validate({
    "roles": [
        {
            "roles": "student",
            "allows": [
                {
                    "resources": [
                        "/games/public",
                        "/games/:gameId",
                        "/games/:gameId/versions",
                        "/games/:gameId/versions/:versionId",
                        "/games/:gameId/versions/:versionId/activities/my",
                        "/classes/my",
                        "/classes/:classId/activities/my",
                        "/activities/my",
                        "/activities/:activityId/results",
                        "/lti/keyid/:gameId/:versionId/:classId",
                        "/activities/:activityId/attemps/my",
                        "/activities/:activityId/attemps/:userId",
                        "/activities/:activityId/attemps",
                        "/courses/:id",
                    ],
                    "permissions": ["get"],
                },
                {
                    "resources": [
                        "/classes/:classId",
                        "/activities/:activityId",
                    ],
                    "permissions": ["put", "get"],
                },
                {
                    "resources": ["/activities/:activityId/results/resultId"],
                    "permissions": ["put"],
                },
            ],
        },
        {
            "roles": "teacher",
            "allows": [
                {
                    "resources": [
                        "/activities/data/:activityId",
                        "/activities/data/:activityId/:user",
                    ],
                    "permissions": ["delete"],
                },
                {
                    "resources": [
                        "/analysis/:id",
                        "/games/public",
                        "/games/:gameId",
                        "/kibana/classvis/",
                        "/games/:gameId/versions",
                        "/games/:gameId/versions/:versionId",
                        "/games/:gameId/versions/:versionId/activities/my",
                        "/classes/my",
                        "/classes/:classId/activities/my",
                        "/activities/my",
                        "/activities/:activityId/results",
                        "/activities/:activityId/attempts",
                        "/activities/:activityId/attempts/my",
                        "/activities/:activityId/attempts/:username",
                        "/lti/keyid/:classId",
                    ],
                    "permissions": ["get"],
                },
                {
                    "resources": [
                        "/classes/:classId",
                        "/classes/:classId/remove",
                        "/activities/:activityId",
                        "/offlinetraces/:activityId",
                        "/classes/external/:domain/:externalId",
                        "/classes/external/:domain/:externalId/remove",
                        "/activities/:activityId/remove",
                        "/kibana/*",
                        "/courses/:id",
                    ],
                    "permissions": ["*"],
                },
                {
                    "resources": [
                        "/classes",
                        "/classes/bundle",
                        "/activities",
                        "/activities/bundle",
                        "/activities/:activityId/event/:event",
                        "/activities/:activityId/results",
                        "/lti",
                    ],
                    "permissions": ["post"],
                },
                {
                    "resources": [
                        "/courses",
                        "/classes/:id/groups",
                        "/classes/:id/groupings",
                    ],
                    "permissions": ["get", "post"],
                },
                {
                    "resources": [
                        "/activities/:activityId/results/resultId",
                        "/classes/groups/:groupId/remove",
                        "/classes/groups/:groupId",
                        "/classes/groupings/:groupingId/remove",
                        "/classes/groupings/:groupingId",
                    ],
                    "permissions": ["put", "delete"],
                },
            ],
        },
        {
            "roles": "teachingassistant",
            "allows": [
                {
                    "resources": [
                        "/activities",
                        "/activities/:activityId/event/:event",
                        "/activities/:activityId/results",
                        "/analysis/:id",
                        "/games/public",
                        "/games/:gameId",
                        "/games/:gameId/versions",
                        "/games/:gameId/versions/:versionId",
                        "/games/:gameId/versions/:versionId/activities/my",
                        "/classes",
                        "/classes/my",
                        "/classes/:classId",
                        "/classes/:classId/remove",
                        "/classes/:classId/activities/my",
                        "/activities/my",
                        "/offlinetraces/:activityId",
                        "/activities/:activityId/results",
                        "/activities/:activityId",
                        "/activities/:activityId/remove",
                        "/activities/:activityId/results/:resultsId",
                        "/lti",
                        "/lti/keyid/:classId",
                        "/kibana/*",
                    ],
                    "permissions": ["get"],
                },
            ],
        },
        {
            "roles": "developer",
            "allows": [
                {
                    "resources": [
                        "/games/my",
                        "/games/:gameId",
                        "/games/:gameId/versions",
                        "/games/:gameId/versions/:versionId",
                        "/kibana/*",
                    ],
                    "permissions": ["*"],
                },
                {
                    "resources": [
                        "/analysis/:id",
                        "/analysis/:versionId",
                    ],
                    "permissions": ["*"],
                },
                {
                    "resources": ["/games/:gameId/remove"],
                    "permissions": ["put"],
                },
                {
                    "resources": [
                        "/classes",
                        "/classes/:classId",
                        "/activities",
                        "/sessions/:sessionId",
                        "/lti/keyid/:classId",
                    ],
                    "permissions": ["get"],
                },
                {
                    "resources": [
                        "/sessions/test/:versionId",
                        "/games",
                        "/games/bundle",
                    ],
                    "permissions": ["post"],
                },
            ],
        },
    ],
    "anonymous": [
        "/games/:id/xapi/:versionId",
        "/collector/start/:trackingCode",
        "/collector/track",
        "/collector/end",
        "/lti/key/:id",
        "/env",
    ],
    "autoroles": [
        "student",
        "teacher",
        "teachingassistant",
        "developer",
    ],
})
